"""
Timer system for coordinating scheduled callbacks across the pet subsystems.

Every component schedules its work through two primitives: a fire-once
delayed callback (call_later) and a repeating callback (call_every). Both
return a TimedTask handle that the owner keeps and cancels on teardown.
Tasks run to completion one at a time on the asyncio loop; run_pending
can also be driven directly with an injected clock.
"""

import asyncio
import itertools
import math
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Dict, List
from config import Config
from loggers import SystemLogger

@dataclass
class TimedTask:
    """
    Represents a callback scheduled on the coordinator.

    Attributes:
        name: Identifier used in logs and status reports
        interval: Delay (fire-once) or period (repeating) in seconds
        callback: Synchronous function to execute
        repeat: Whether the task reschedules itself after running
        next_run: Clock time at which the task is next due
        priority: Lower numbers run first among tasks due at the same time
        task_id: Creation order, used as the final tie-break
    """
    name: str
    interval: float
    callback: Callable[[], None]
    repeat: bool = False
    next_run: float = 0.0
    priority: int = 0
    task_id: int = 0
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        """Prevent any further execution of this task."""
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not self.cancelled

class TimerCoordinator:
    """
    Coordinates timed callbacks for all components.

    The coordinator itself holds no behavior; it only runs what components
    ask it to run, in due-time order.
    """

    def __init__(self, clock: Callable[[], float] = time.time, poll_interval: Optional[float] = None):
        """
        Initialize the timer coordinator.

        Args:
            clock: Returns the current time in seconds
            poll_interval: Seconds between checks in run(); defaults to Config.TIMER_POLL_INTERVAL
        """
        self.clock = clock
        self.poll_interval = poll_interval if poll_interval is not None else Config.TIMER_POLL_INTERVAL
        self.tasks: Dict[int, TimedTask] = {}
        self.is_running: bool = False
        self._ids = itertools.count(1)

    def call_later(self, name: str, delay: float, callback: Callable[[], None], priority: int = 0) -> TimedTask:
        """
        Schedule callback to run once, delay seconds from now.

        Args:
            name: Identifier for logs and status
            delay: Seconds until execution (negative values run on the next poll)
            callback: Function to execute
            priority: Lower numbers run first

        Returns:
            TimedTask: handle for cancellation
        """
        return self._add(TimedTask(
            name=name,
            interval=max(0.0, delay),
            callback=callback,
            repeat=False,
            priority=priority
        ))

    def call_every(self, name: str, interval: float, callback: Callable[[], None], priority: int = 0) -> TimedTask:
        """
        Schedule callback to run every interval seconds, first run one interval from now.

        Raises:
            ValueError: if interval is not positive
        """
        if interval <= 0:
            raise ValueError(f"Repeating task '{name}' needs a positive interval, got {interval}")
        return self._add(TimedTask(
            name=name,
            interval=interval,
            callback=callback,
            repeat=True,
            priority=priority
        ))

    def _add(self, task: TimedTask) -> TimedTask:
        task.task_id = next(self._ids)
        task.next_run = self.clock() + task.interval
        self.tasks[task.task_id] = task
        SystemLogger.debug(f"Task scheduled: {task.name} (in {task.interval:.3f}s, repeat={task.repeat})")
        return task

    def cancel(self, task: Optional[TimedTask]) -> None:
        """
        Cancel a task and drop it from the coordinator. Accepts None for convenience.
        """
        if task is None:
            return
        task.cancel()
        self.tasks.pop(task.task_id, None)

    def next_due(self) -> Optional[float]:
        """Clock time of the earliest pending task, or None when idle."""
        pending = [t.next_run for t in self.tasks.values() if t.active]
        return min(pending) if pending else None

    def _pop_due(self, now: float) -> Optional[TimedTask]:
        due = [t for t in self.tasks.values() if t.active and t.next_run <= now]
        if not due:
            return None
        return min(due, key=lambda t: (t.next_run, t.priority, t.task_id))

    def run_pending(self) -> int:
        """
        Execute every task that is due at the current clock time.

        Tasks run one at a time, earliest first. A repeating task that missed
        several periods (host suspend, a stalled loop) runs once and resumes
        on its next future period. A task that raises is logged and does not
        stop the others.

        Returns:
            int: number of callbacks executed
        """
        now = self.clock()
        executed = 0
        for task_id in [tid for tid, t in self.tasks.items() if t.cancelled]:
            del self.tasks[task_id]
        while True:
            task = self._pop_due(now)
            if task is None:
                break
            if task.repeat:
                task.next_run += task.interval
                if task.next_run <= now:
                    skipped = math.floor((now - task.next_run) / task.interval) + 1
                    task.next_run += skipped * task.interval
            else:
                self.tasks.pop(task.task_id, None)
            self._execute_task(task)
            executed += 1
        return executed

    def _execute_task(self, task: TimedTask) -> None:
        try:
            task.callback()
        except Exception as e:
            SystemLogger.log_task_error(task.name, f"{type(e).__name__}: {e}")

    async def run(self) -> None:
        """
        Main loop for executing tasks at their scheduled times.

        This method runs continuously while is_running is True.
        """
        self.is_running = True
        while self.is_running:
            self.run_pending()
            # Small sleep to prevent CPU hogging
            await asyncio.sleep(self.poll_interval)

    def stop(self) -> None:
        """Stop the run loop after the current poll."""
        self.is_running = False

    def clear(self) -> None:
        """Cancel every outstanding task."""
        for task in list(self.tasks.values()):
            task.cancel()
        self.tasks.clear()

    def get_task_status(self) -> Dict[str, Dict]:
        """
        Get current status of all outstanding tasks.

        Returns:
            Dict keyed by "name#id" with time until next run, interval and repeat flag
        """
        current_time = self.clock()
        return {
            f"{task.name}#{task.task_id}": {
                'next_run': task.next_run - current_time,
                'interval': task.interval,
                'repeat': task.repeat
            }
            for task in sorted(self.tasks.values(), key=lambda t: t.next_run)
            if task.active
        }
