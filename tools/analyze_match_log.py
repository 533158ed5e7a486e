#!/usr/bin/env python3
"""
Summarise a match debug log: scores, possession swings and steering usage.

Usage:
    python tools/analyze_match_log.py <log_file_path>
"""

import re
import sys
from collections import Counter, defaultdict
from pathlib import Path

EVENT_RE = re.compile(r'Time: ([\d.]+)s \| Event: (\w+) \| Details: (.+)$')
ENTITY_RE = re.compile(r'Entity (\w+) \((\w+)\).*Has Ball: (True|False)(?: \| Behaviour: (\w+))?')
CLOCK_RE = re.compile(r'Period: (\d+) \| Remaining: (\d+)s \| Phase: (\w+)')


def parse_log_file(log_path):
    """Parse the debug log and extract key metrics."""

    events = []
    event_types = Counter()
    scores = []
    possessions = []
    phases = []

    behaviour_usage = defaultdict(Counter)
    ticks_with_ball = Counter()

    with open(log_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.rstrip('\n')

            match = EVENT_RE.search(line)
            if match:
                time, event_type, details = match.groups()
                time = float(time)
                event_types[event_type] += 1
                events.append((time, event_type, details))

                if event_type == 'score':
                    scores.append((time, details))
                elif event_type == 'possession':
                    possessions.append((time, details))
                continue

            match = ENTITY_RE.search(line)
            if match:
                entity_id, _team, has_ball, behaviour = match.groups()
                if behaviour:
                    behaviour_usage[entity_id][behaviour] += 1
                if has_ball == 'True':
                    ticks_with_ball[entity_id] += 1
                continue

            match = CLOCK_RE.search(line)
            if match:
                period, remaining, phase = match.groups()
                phases.append((int(period), int(remaining), phase))

    return {
        'events': events,
        'event_types': event_types,
        'scores': scores,
        'possessions': possessions,
        'phases': phases,
        'behaviour_usage': behaviour_usage,
        'ticks_with_ball': ticks_with_ball,
    }


def analyze_scoring(scores):
    """Report touchdowns and how far apart they were."""
    print("\n=== SCORING ANALYSIS ===")
    print(f"Total touchdowns: {len(scores)}")

    if not scores:
        print("  ⚠️  No touchdowns - carriers may be tagged too quickly")
        return

    titans = sum(1 for _, details in scores if 'Titans' in details)
    print(f"  Titans: {titans}  Bots: {len(scores) - titans}")

    times = [t for t, _ in scores]
    if len(times) > 1:
        intervals = [times[i + 1] - times[i] for i in range(len(times) - 1)]
        print(f"  Average time between touchdowns: {sum(intervals) / len(intervals):.1f}s")


def analyze_possession_sequences(possessions):
    """Analyze possession changes and patterns."""
    print("\n=== POSSESSION ANALYSIS ===")
    print(f"Total possession changes: {len(possessions)}")

    tags = [details for _, details in possessions if 'tags the carrier' in details]
    passes = [details for _, details in possessions if details.startswith('Pass to')]
    kickoffs = [details for _, details in possessions if details.startswith('Kickoff')]
    print(f"  Kickoffs: {len(kickoffs)}  Tags: {len(tags)}  Passes: {len(passes)}")

    if len(possessions) < 2:
        print("  ⚠️  Very few possession changes - game may be too one-sided")
        return

    times = [t for t, _ in possessions]
    durations = [times[i + 1] - times[i] for i in range(len(times) - 1)]
    avg_duration = sum(durations) / len(durations)
    print(f"  Average possession duration: {avg_duration:.1f}s")

    if avg_duration < 0.5:
        print("  ⚠️  Ball ping-pongs between teams - tag radius may be too generous")


def analyze_entity_activity(behaviour_usage, ticks_with_ball):
    """Show which steering behaviours each entity spent its ticks in."""
    print("\n=== ENTITY ACTIVITY ANALYSIS ===")

    if not behaviour_usage:
        print("  No entity traces found (trace_entities disabled?)")
        return

    for entity_id in sorted(behaviour_usage):
        usage = behaviour_usage[entity_id]
        total = sum(usage.values())
        summary = ", ".join(f"{name} {count / total * 100:.0f}%" for name, count in usage.most_common())
        print(f"  {entity_id}: {summary} | ticks with ball: {ticks_with_ball[entity_id]}")


def main():
    if len(sys.argv) < 2:
        print("Usage: python tools/analyze_match_log.py <log_file_path>")
        print("\nExample:")
        print("  python tools/analyze_match_log.py debug_logs/match_debug_20251117_222236.txt")
        sys.exit(1)

    log_path = Path(sys.argv[1])

    if not log_path.exists():
        print(f"Error: Log file not found: {log_path}")
        sys.exit(1)

    print(f"Analyzing: {log_path.name}")
    print("=" * 60)

    data = parse_log_file(log_path)

    print("\n=== EVENT SUMMARY ===")
    for event_type, count in data['event_types'].most_common(15):
        print(f"  {event_type}: {count}")

    if data['phases']:
        period, remaining, phase = data['phases'][-1]
        print(f"\nLast clock state: period {period}, {remaining}s left, {phase}")

    analyze_scoring(data['scores'])
    analyze_possession_sequences(data['possessions'])
    analyze_entity_activity(data['behaviour_usage'], data['ticks_with_ball'])

    print("\n" + "=" * 60)
    print("Analysis complete!")


if __name__ == '__main__':
    main()
