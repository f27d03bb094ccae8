"""Thread-safe and asyncio-friendly wrapper around a status block.

Block updates may block for a long time (the volume block retries
amixer until it answers). BlockWorker serialises updates so two never
run at once, and offers update_async() which runs the update on a
worker thread so an event loop keeps running. Reads never wait for an
update in progress: they return the output of the last committed
state, which each block guards itself (see Block).
"""

import asyncio
import logging
import threading
from datetime import datetime
from typing import Optional

from .config import Config
from .errors import UpdateError
from .models import Block, DisplayOutput, StatusBlock

logger = logging.getLogger(__name__)


class BlockWorker:
    """Serialises updates of a single block; reads stay non-blocking."""

    def __init__(self, block: Block):
        """Initialize block worker.

        Args:
            block: Block to wrap
        """
        self.block = block
        self._update_lock = threading.Lock()

    def name(self) -> str:
        return self.block.name()

    def update(self) -> None:
        """Update the block, waiting for any update already running.

        Raises:
            UpdateError: Propagated from the block
        """
        with self._update_lock:
            try:
                self.block.update()
            except UpdateError as e:
                logger.warning(f"Block {e.block_name} update failed: {e.message}")
                raise

    async def update_async(self) -> None:
        """Update the block on a worker thread.

        Raises:
            UpdateError: Propagated from the block
        """
        await asyncio.to_thread(self.update)

    def output(self) -> Optional[DisplayOutput]:
        return self.block.output()

    def next_update_time(self) -> Optional[datetime]:
        return self.block.next_update_time()

    def status_block(self, config: Config) -> Optional[StatusBlock]:
        """Get the block's current output as an i3bar status block.

        Returns:
            StatusBlock, or None if the block has nothing to show
        """
        output = self.output()
        if output is None:
            return None
        return output.to_status_block(self.name(), config)
