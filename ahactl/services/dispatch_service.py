"""
Dispatch service - runs one command against many devices concurrently.

Flow per call:
1. Resolve names via a fresh device listing (abort on failure)
2. Build one target per name (abort on any unknown name)
3. Execute all targets concurrently, wait for every one of them
4. Fold the outcomes into a single verdict
"""

import asyncio
from typing import Dict, List, Optional, Sequence

from ahactl.devices.aha_client import AhaClient
from ahactl.errors import UnknownDeviceError
from ahactl.services.aggregation import fold
from ahactl.services.command_service import Command, CommandTarget, Outcome, build_work
from ahactl.services.directory_service import DeviceDirectory
from ahactl.utils.logging import get_logger

logger = get_logger(__name__)


class DispatchService:
    """
    Concurrent multi-device command dispatcher.

    Handles:
    - Fail-fast name resolution (nothing is sent unless every name resolves)
    - Unbounded fan-out, or at most max_concurrency requests in flight
    - Barrier: aggregation only starts after every target finished
    - Partial failures folded into one AggregateError
    """

    def __init__(
        self,
        client: AhaClient,
        directory: Optional[DeviceDirectory] = None,
        max_concurrency: Optional[int] = None
    ):
        """
        Initialize dispatch service.

        Args:
            client: Gateway client used for command requests
            directory: Name resolver (defaults to one backed by client)
            max_concurrency: Cap on concurrent requests, None for no cap
        """
        self.client = client
        self.directory = directory or DeviceDirectory(client)
        self.max_concurrency = max_concurrency

    async def dispatch(self, command: Command, names: Sequence[str]) -> None:
        """
        Execute command against every named device.

        Args:
            command: Command to send
            names: Device names; duplicates are executed once per occurrence

        Raises:
            DirectoryFetchError: Device list could not be fetched
            UnknownDeviceError: A name is not in the device list
            AggregateError: At least one device failed
        """
        logger.info("dispatch_started", command=command.label, devices=list(names))

        table = await self.directory.resolve()
        targets = self._build_targets(table, names, command)
        outcomes = await self._execute_all(targets)

        fold(outcomes)

    def _build_targets(
        self,
        table: Dict[str, str],
        names: Sequence[str],
        command: Command
    ) -> List[CommandTarget]:
        """Pair every name with its work; all-or-nothing."""
        targets = []
        for name in names:
            ain = table.get(name)

            # Guard clause: unknown name or empty address aborts the batch
            if not ain:
                logger.warning("dispatch_unknown_device", device=name)
                raise UnknownDeviceError(name, table.keys())

            targets.append(CommandTarget(name=name, work=build_work(self.client, ain, command)))

        return targets

    async def _execute_all(self, targets: List[CommandTarget]) -> List[Outcome]:
        """
        Run every target concurrently and collect outcomes in completion order.
        """
        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None

        async def run(target: CommandTarget) -> Outcome:
            if semaphore is None:
                return await target.execute()
            async with semaphore:
                return await target.execute()

        tasks = [asyncio.create_task(run(target)) for target in targets]

        outcomes = []
        for finished in asyncio.as_completed(tasks):
            outcomes.append(await finished)
        return outcomes
