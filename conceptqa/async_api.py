"""
Async API for answering questions without blocking an event loop.

Queries run in a thread pool. The engine serializes them with its own
lock, so concurrency here only keeps the event loop responsive while
answers are produced one at a time.

Example:
    >>> from conceptqa import QAEngine
    >>> from conceptqa.async_api import AsyncQAEngine
    >>> import asyncio
    >>>
    >>> async def main():
    ...     async with AsyncQAEngine(QAEngine()) as qa:
    ...         results = await qa.batch_answer_async(
    ...             "The cat sat on the mat. The dog ran fast.",
    ...             ["What did the cat do?", "How did the dog run?"],
    ...         )
    ...     return results
    >>>
    >>> results = asyncio.run(main())
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from threading import Event
from typing import Dict, List, Optional

from .engine import QAEngine
from .results import AnswerResult
from .validation import validate_params, validate_positive_int

logger = logging.getLogger(__name__)


class AsyncQAEngine:
    """
    Async wrapper for a QAEngine.

    Attributes:
        engine: The underlying QAEngine instance
        max_workers: Maximum number of worker threads (default: 2)
    """

    @validate_params(max_workers=lambda n: validate_positive_int(n, 'max_workers'))
    def __init__(self, engine: Optional[QAEngine] = None, max_workers: int = 2):
        """
        Args:
            engine: Engine to wrap; a default one is created when omitted
            max_workers: Maximum number of worker threads

        Raises:
            ValueError: If max_workers < 1
        """
        self.engine = engine or QAEngine()
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(max_workers=max_workers)
        self._cancel_event = Event()
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("AsyncQAEngine has been shut down")
        if self._cancel_event.is_set():
            raise asyncio.CancelledError("Operation cancelled")

    async def find_answer_async(self, context: str, question: str) -> AnswerResult:
        """
        Answer one question in a worker thread.

        Raises:
            RuntimeError: If the wrapper has been shut down
            asyncio.CancelledError: If operations were cancelled
        """
        self._check_open()
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._executor, self.engine.find_answer, context, question)

    async def batch_answer_async(
        self,
        context: str,
        questions: List[str],
        concurrency: int = 2
    ) -> Dict[str, AnswerResult]:
        """
        Answer several questions about the same passage.

        Args:
            context: Passage shared by every question
            questions: Questions to answer
            concurrency: Maximum questions in flight (default: 2)

        Returns:
            Dict mapping each question to its result (repeated questions
            keep the last result)

        Raises:
            ValueError: If questions is empty or concurrency < 1
            asyncio.CancelledError: If operations were cancelled
        """
        if not questions:
            raise ValueError("questions list must not be empty")
        if not isinstance(concurrency, int) or concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._check_open()

        sem = asyncio.Semaphore(concurrency)

        async def answer_with_semaphore(question: str) -> AnswerResult:
            async with sem:
                return await self.find_answer_async(context, question)

        results = await asyncio.gather(*(answer_with_semaphore(q) for q in questions))
        return {question: result for question, result in zip(questions, results)}

    def cancel(self) -> None:
        """Make subsequent async calls raise asyncio.CancelledError."""
        self._cancel_event.set()
        logger.info("Async operations cancelled")

    def reset_cancel(self) -> None:
        self._cancel_event.clear()

    def shutdown(self, wait: bool = True) -> None:
        """Stop the thread pool; running queries finish first when wait is True."""
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=wait)
        logger.info("Async engine shut down")

    async def close(self) -> None:
        """Shut down without blocking the event loop."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.shutdown)

    async def __aenter__(self) -> 'AsyncQAEngine':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False
