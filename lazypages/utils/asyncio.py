import asyncio


class TaskSet:
    """Keeps strong references to fire-and-forget tasks until they finish."""

    def __init__(self):
        self._tasks = set()

    def create_task(self, coro, **kwargs):
        task = asyncio.get_running_loop().create_task(coro, **kwargs)

        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        return task

    async def join(self):
        # Finishing tasks may spawn new ones, so drain until nothing is left.
        while self._tasks:
            await asyncio.gather(*self._tasks)

    def __len__(self):
        return len(self._tasks)
