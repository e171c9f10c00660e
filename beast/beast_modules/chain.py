"""Beast -- chainable, deferred operations over a wrapped list.

Chain methods only enqueue; nothing runs until value() starts the
drain. Each step body sees the instance through a capability struct
rather than the instance itself.

    >>> Beast([1, 2, 3]).map(lambda x: x * 2).filter(lambda x: x > 2).value()
    [4, 6]
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from returns.io import IOFailure
from returns.unsafe import unsafe_perform_io

from beast.beast_modules import adapters, io_ops
from beast.beast_modules.container import Container
from beast.beast_modules.engine.queue import StepQueue
from beast.beast_modules.engine.scheduler import Scheduler
from beast.beast_modules.engine.types import AutoStep, SuspendingStep
from beast.beast_modules.errors import StepExecutionFailure
from beast.beast_modules.mixins.registry import MixinRegistry
from beast.beast_modules.types import (
    EngineConfig,
    ReadCapability,
    TapCapability,
    WaitCapability,
    WriteCapability,
)

if TYPE_CHECKING:
    from beast.beast_modules.engine.scheduler import SchedulerState
    from beast.beast_modules.engine.types import Resume, Step
    from beast.beast_modules.mixins.types import MixinFunction, MixinSpec
    from beast.beast_modules.types import Inspection

CHAIN_METHODS = frozenset({
    "append",
    "concat",
    "config",
    "enqueue",
    "filter",
    "get",
    "inspect",
    "map",
    "mixins",
    "prepend",
    "registry",
    "reverse",
    "set",
    "slice",
    "sort",
    "splice",
    "state",
    "tap",
    "value",
    "wait",
    "wrap",
})


class Beast:
    """Wraps a list and runs queued operations on it strictly in order.

    registry: mixin table to share with other instances. Instances
    given the same registry see each other's mixins; by default each
    instance gets a private one.
    """

    def __new__(cls, initial: object = None, **kwargs: Any) -> Beast:
        if isinstance(initial, Beast):
            return initial
        return super().__new__(cls)

    def __init__(
        self,
        initial: object = None,
        *,
        registry: MixinRegistry | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        if "_container" in self.__dict__:
            # Beast(existing) returned existing from __new__; keep its state.
            return
        self._config = config if config is not None else EngineConfig()
        self._container = Container(initial)
        self._queue = StepQueue()
        self._scheduler = Scheduler(self._queue, self._config)
        if registry is None:
            registry = MixinRegistry(
                allow_override=self._config.allow_mixin_override,
            )
        registry.reserve(CHAIN_METHODS)
        self._registry = registry

    @classmethod
    def wrap(cls, obj: object, **kwargs: Any) -> Beast:
        """Return obj unchanged if it is already a Beast, else wrap it."""
        return cls(obj, **kwargs)

    def __repr__(self) -> str:
        return (
            f"Beast({self._container.get()!r},"
            f" state={self._scheduler.state!r},"
            f" cursor={self._queue.cursor}/{len(self._queue)})"
        )

    # --- Direct container access (bypasses the queue) ---

    def get(self) -> list[Any]:
        return self._container.get()

    def set(self, value: object) -> None:
        self._container.set(value)

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def registry(self) -> MixinRegistry:
        return self._registry

    @property
    def state(self) -> SchedulerState:
        return self._scheduler.state

    def inspect(self) -> Inspection:
        return self._scheduler.inspect()

    # --- Queue ---

    def enqueue(self, step: Step | Callable[[], object]) -> int:
        """Queue a step and return the new queue length.

        Bare callables are queued as auto-advancing steps. Anything else
        is reported and not queued; the length is returned unchanged.
        """
        if not isinstance(step, (AutoStep, SuspendingStep)):
            if not callable(step):
                if self._config.report_failures:
                    rejected = StepExecutionFailure(
                        step_name="enqueue",
                        error_type="StepNotCallable",
                        message=f"Cannot queue non-callable {step!r}",
                    )
                    io_ops.write_stderr(f"{rejected}\n")
                return len(self._queue)
            step = AutoStep(
                name=getattr(step, "__name__", "enqueue"),
                body=step,
            )
        return self._queue.enqueue(step)

    def _push(self, name: str, body: Callable[[], object]) -> Beast:
        self._queue.enqueue(AutoStep(name=name, body=body))
        return self

    def _replace_with(
        self,
        name: str,
        operation: Callable[..., list[Any]],
        *args: Any,
        **kwargs: Any,
    ) -> Beast:
        def body() -> None:
            self._container.set(
                operation(self._container.get(), *args, **kwargs),
            )

        return self._push(name, body)

    # --- Built-in chain methods ---

    def map(self, fn: Callable[[Any], Any]) -> Beast:
        return self._replace_with("map", adapters.map_items, fn)

    def filter(self, fn: Callable[[Any], object]) -> Beast:
        return self._replace_with("filter", adapters.filter_items, fn)

    def reverse(self) -> Beast:
        return self._replace_with("reverse", adapters.reverse_items)

    def slice(self, start: int | None = 0, end: int | None = None) -> Beast:
        return self._replace_with("slice", adapters.slice_items, start, end)

    def splice(
        self,
        start: int,
        delete_count: int | None = None,
        *items: Any,
    ) -> Beast:
        """Queue a splice; the removed items become the new sequence."""
        return self._replace_with(
            "splice", adapters.splice_items, start, delete_count, *items,
        )

    def sort(
        self,
        key: Callable[[Any], Any] | None = None,
        *,
        reverse: bool = False,
        compare: Callable[[Any, Any], int] | None = None,
    ) -> Beast:
        return self._replace_with(
            "sort",
            adapters.sort_items,
            key,
            reverse=reverse,
            compare=compare,
        )

    def concat(self, *values: Any) -> Beast:
        return self._replace_with("concat", adapters.concat_items, *values)

    def append(self, *values: Any) -> Beast:
        return self._push(
            "append",
            lambda: adapters.append_items(self._container.get(), *values),
        )

    def prepend(self, *values: Any) -> Beast:
        return self._push(
            "prepend",
            lambda: adapters.prepend_items(self._container.get(), *values),
        )

    # --- Mixins ---

    def mixins(self, table: Mapping[str, MixinFunction]) -> Beast:
        """Register chain verbs on this instance's registry.

        Rejected entries are reported and skipped; the rest still
        register.
        """
        for name, function in table.items():
            result = self._registry.register(name, function)
            if isinstance(result, IOFailure) and self._config.report_failures:
                error = unsafe_perform_io(result.failure())
                io_ops.write_stderr(f"{error}\n")
        return self

    def _call_mixin(
        self,
        spec: MixinSpec,
        *args: Any,
        **kwargs: Any,
    ) -> Beast:
        caps = WriteCapability(get=self.get, set=self.set)
        return self._push(
            spec.name,
            lambda: spec.invoke(caps, *args, **kwargs),
        )

    def __getattr__(self, name: str) -> Callable[..., Beast]:
        registry = self.__dict__.get("_registry")
        spec = None
        if registry is not None and not name.startswith("_"):
            spec = registry.get(name)
        if spec is None:
            msg = f"'{type(self).__name__}' object has no attribute '{name}'"
            raise AttributeError(msg)

        def chain_method(*args: Any, **kwargs: Any) -> Beast:
            return self._call_mixin(spec, *args, **kwargs)

        chain_method.__name__ = name
        return chain_method

    # --- Flow control ---

    def wait(self, callback: Callable[[WaitCapability], object]) -> Beast:
        """Queue a step that pauses the drain until caps.next() is called."""

        def body(resume: Resume) -> None:
            callback(WaitCapability(get=self.get, set=self.set, next=resume))

        self._queue.enqueue(SuspendingStep(name="wait", body=body))
        return self

    def tap(self, callback: Callable[[TapCapability], object]) -> Beast:
        caps = TapCapability(get=self.get, inspect=self.inspect)
        return self._push("tap", lambda: callback(caps))

    def value(
        self,
        callback: Callable[[ReadCapability], object] | None = None,
    ) -> list[Any]:
        """Queue callback (if given), drain once, return the current list.

        The drain stops at the first suspending step still waiting on
        its continuation, so the result may reflect an unfinished
        pipeline. While suspended, value() does not skip the pending
        wait; callback runs once the wait resumes.
        """
        if callable(callback):
            caps = ReadCapability(get=self.get)
            self._push("value", lambda: callback(caps))
        self._scheduler.resume()
        return self._container.get()
