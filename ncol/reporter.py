"""
Console Reporter

Prints progress lines for the events published while arranging.
"""

import sys
import time

from pubsub import pub

from . import topics


class ConsoleReporter:
    """Prints arrangement progress in response to events.

    This component subscribes to the snapshot, plan, column, action and
    lifecycle topics and writes one line per event.
    """

    def __init__(self, bus=pub, out=None):
        """Initialize console reporter.

        Args:
            bus: Event bus instance (Pypubsub)
            out: Text stream to print to (defaults to stdout at print time)
        """
        self.bus = bus
        self.out = out
        self._setup_subscriptions()

    def _setup_subscriptions(self):
        """Subscribe to progress events."""
        self.bus.subscribe(self._on_snapshot_taken, topics.SNAPSHOT_TAKEN)
        self.bus.subscribe(self._on_plan_empty, topics.PLAN_EMPTY)
        self.bus.subscribe(self._on_plan_computed, topics.PLAN_COMPUTED)
        self.bus.subscribe(self._on_column_building, topics.COLUMN_BUILDING)
        self.bus.subscribe(self._on_action_rejected, topics.ACTION_REJECTED)
        self.bus.subscribe(self._on_arrange_finished, topics.ARRANGE_FINISHED)

    def unsubscribe(self):
        self.bus.unsubscribe(self._on_snapshot_taken, topics.SNAPSHOT_TAKEN)
        self.bus.unsubscribe(self._on_plan_empty, topics.PLAN_EMPTY)
        self.bus.unsubscribe(self._on_plan_computed, topics.PLAN_COMPUTED)
        self.bus.unsubscribe(self._on_column_building, topics.COLUMN_BUILDING)
        self.bus.unsubscribe(self._on_action_rejected, topics.ACTION_REJECTED)
        self.bus.unsubscribe(self._on_arrange_finished, topics.ARRANGE_FINISHED)

    def _print(self, message: str):
        print(message, file=self.out or sys.stdout)

    def _on_snapshot_taken(self, workspace, windows):
        name = workspace.name or workspace.idx or workspace.id
        self._print(f"Found {len(windows)} windows on workspace {name}")

    def _on_plan_empty(self, workspace):
        self._print("No windows found on current workspace")

    def _on_plan_computed(self, plan):
        self._print(
            f"Creating {plan.num_columns} columns with up to "
            f"{plan.windows_per_column} windows per column"
        )

    def _on_column_building(self, index, window_ids):
        ids = ", ".join(str(i) for i in window_ids)
        self._print(f"  Building column {index} with windows {ids}")

    def _on_action_rejected(self, action, message):
        self._print(f"  niri rejected {action.name}: {message}")

    def _on_arrange_finished(self, plan, dry_run):
        if dry_run:
            self._print(
                f"Dry run: would arrange {plan.window_count} windows as {plan.distribution}"
            )
        else:
            self._print(
                f"Arranged {plan.window_count} windows into {plan.num_columns} columns"
            )


def debug_event_logger(topic=pub.AUTO_TOPIC, **kwargs):
    """Log every bus event to stderr as ``ncol[HH:MM:SS] topic key=value ...``."""
    timestamp = time.strftime("%H:%M:%S")
    fields = " ".join(f"{k}={v!r}" for k, v in sorted(kwargs.items()))
    line = f"ncol[{timestamp}] {topic.getName()} {fields}"
    print(line.rstrip(), file=sys.stderr)
