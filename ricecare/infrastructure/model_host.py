"""
Infrastructure layer: Lifecycle owner for the ONNX leaf classifier session.
"""
import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional

import numpy as np
import onnxruntime as ort

from ricecare.domain.exceptions import InferenceError, ModelLoadError
from ricecare.services.domain.tensor_builder import NormalizedTensor

logger = logging.getLogger(__name__)

SessionFactory = Callable[[str], Any]


class ModelState(str, Enum):
    """Lifecycle state of the inference session."""
    UNLOADED = "unloaded"
    LOADING = "loading"
    READY = "ready"


def create_onnx_session(model_path: str) -> ort.InferenceSession:
    """Build a CPU inference session for the graph at ``model_path``."""
    if not Path(model_path).is_file():
        raise FileNotFoundError(f"Model file not found: {model_path}")
    return ort.InferenceSession(model_path, providers=["CPUExecutionProvider"])


class ModelHost:
    """
    Owns one inference session for the lifetime of the application.

    State machine: UNLOADED -> LOADING -> READY, and LOADING -> UNLOADED
    when initialization fails so a later call can retry.

    Concurrent ``load()`` callers share a single in-flight initialization
    and all receive its outcome. Inference failures leave the session READY.
    """

    def __init__(
        self,
        model_path: str,
        session_factory: Optional[SessionFactory] = None,
        serialize_runs: bool = True,
    ):
        """
        Initialize the host without loading the graph.

        Args:
            model_path: Path to the serialized graph
            session_factory: Callable building a session from a path
            serialize_runs: Allow only one ``run`` on the session at a time
        """
        self.model_path = model_path
        self.session_factory = session_factory or create_onnx_session
        self.serialize_runs = serialize_runs

        self._state = ModelState.UNLOADED
        self._session: Any = None
        self._input_name: Optional[str] = None
        self._output_name: Optional[str] = None
        self._pending_load: Optional[asyncio.Task] = None
        self._state_lock = asyncio.Lock()
        self._run_lock = asyncio.Lock()

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def input_name(self) -> Optional[str]:
        return self._input_name

    @property
    def output_name(self) -> Optional[str]:
        return self._output_name

    async def load(self) -> None:
        """
        Load the graph if it is not loaded yet.

        No-op when READY. While LOADING, waits on the load already in flight.

        Raises:
            ModelLoadError: If initialization fails
        """
        async with self._state_lock:
            if self._state is ModelState.READY:
                return
            if self._pending_load is None:
                self._state = ModelState.LOADING
                self._pending_load = asyncio.create_task(self._initialize())
            pending = self._pending_load

        await asyncio.shield(pending)

    async def _initialize(self) -> None:
        logger.info(f"Loading inference graph from {self.model_path}")
        try:
            session = await asyncio.to_thread(self.session_factory, self.model_path)
            input_name = session.get_inputs()[0].name
            output_name = session.get_outputs()[0].name
        except Exception as e:
            async with self._state_lock:
                self._state = ModelState.UNLOADED
                self._pending_load = None
            logger.error(f"Failed to load inference graph: {e}")
            raise ModelLoadError(f"Model loading failed: {e}") from e

        async with self._state_lock:
            self._session = session
            self._input_name = input_name
            self._output_name = output_name
            self._state = ModelState.READY
            self._pending_load = None

        logger.info(f"Model ready (input='{input_name}', output='{output_name}')")

    async def run(self, tensor: NormalizedTensor) -> np.ndarray:
        """
        Execute the graph on one input tensor, loading it first if needed.

        Args:
            tensor: Normalized planar input

        Returns:
            Flat float vector of the first declared output

        Raises:
            ModelLoadError: If the lazy load fails
            InferenceError: If execution fails
        """
        if self._state is not ModelState.READY:
            await self.load()

        feeds = {self._input_name: tensor.as_array()}

        if self.serialize_runs:
            async with self._run_lock:
                return await self._execute(feeds)
        return await self._execute(feeds)

    async def _execute(self, feeds: dict[str, np.ndarray]) -> np.ndarray:
        try:
            outputs = await asyncio.to_thread(self._session.run, [self._output_name], feeds)
            return np.asarray(outputs[0], dtype=np.float32).reshape(-1)
        except Exception as e:
            logger.error(f"Inference failed: {e}")
            raise InferenceError(f"Inference failed: {e}") from e
