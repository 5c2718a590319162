"""
Shared API state - sio, roadmap store, generation run state.
Initialized by main.py after creating app and services.
"""

from typing import Any, Optional


class GenerationRunState:
    """Mutable container for generation abort/task state. Main holds refs for stop."""
    abort_event: Optional[Any] = None
    run_task: Optional[Any] = None
    lock: Optional[Any] = None


# Set by main.py
sio: Any = None
roadmap_store: Any = None
generation_state: Optional[GenerationRunState] = None


def init_api_state(sio_instance, store, run_state: GenerationRunState):
    global sio, roadmap_store, generation_state
    sio = sio_instance
    roadmap_store = store
    generation_state = run_state
