"""Tool abstract base class.

Defines the contract every tool implements.  A tool is constructed with
the ``DatasetResolver`` of the current conversation and executed with
raw (camelCase) arguments from the LLM runtime.

Lifecycle:
    1. ``execute(raw_args)`` validates the arguments against
       ``args_model``.  Invalid arguments produce a ``success: false``
       result.
    2. ``run(args)`` does the work and returns a ``ToolResult``.
    3. A ``DatasetNotFoundError`` from ``run`` becomes a ``success: false``
       result carrying its message; any other exception becomes a
       ``success: false`` result prefixed with ``error_prefix``.

``execute`` never raises.
"""

from __future__ import annotations

import abc
import logging
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from pydantic import ValidationError as PydanticValidationError

from homescout.core.exceptions import DatasetNotFoundError, ToolArgumentError
from homescout.models.arguments import ToolArguments
from homescout.models.contracts import failure_result

if TYPE_CHECKING:
    from homescout.models.contracts import ToolResult
    from homescout.models.feature import Feature
    from homescout.stores.base import DatasetResolver

logger = logging.getLogger("homescout.tools.base")

ArgsT = TypeVar("ArgsT", bound=ToolArguments)


class Tool(abc.ABC, Generic[ArgsT]):
    """Abstract base class for dataset-producing tools.

    Subclasses set ``name``, ``description``, ``args_model`` and
    ``error_prefix`` and implement ``run``.
    """

    name: ClassVar[str]
    description: ClassVar[str]
    args_model: ClassVar[type[ToolArguments]]
    error_prefix: ClassVar[str] = "Error running tool"

    def __init__(self, resolver: DatasetResolver) -> None:
        self._resolver = resolver

    @property
    def resolver(self) -> DatasetResolver:
        return self._resolver

    @classmethod
    def definition(cls) -> dict[str, Any]:
        """Function-calling definition advertised to the language model."""
        return {
            "name": cls.name,
            "description": cls.description,
            "parameters": cls.args_model.model_json_schema(by_alias=True),
        }

    @classmethod
    def parse_args(cls, raw_args: dict[str, Any]) -> ArgsT:
        """Validate *raw_args* against ``args_model``.

        Raises:
            ToolArgumentError: If validation fails.
        """
        try:
            return cls.args_model.model_validate(raw_args)  # type: ignore[return-value]
        except PydanticValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in exc.errors()
            )
            msg = f"Invalid arguments for {cls.name}: {problems}"
            raise ToolArgumentError(msg, stage=cls.name) from exc

    async def execute(self, raw_args: dict[str, Any]) -> ToolResult:
        """Validate arguments, run the tool, and convert failures to results."""
        try:
            args = self.parse_args(raw_args)
        except ToolArgumentError as exc:
            logger.warning("Tool arguments rejected | tool=%s | error=%s", self.name, exc.message)
            return failure_result(exc.message)

        logger.info("Tool called | tool=%s | args=%s", self.name, args.model_dump(by_alias=True))
        try:
            return await self.run(args)
        except DatasetNotFoundError as exc:
            logger.warning(
                "Tool dataset missing | tool=%s | dataset=%s", self.name, exc.dataset_name
            )
            return failure_result(exc.message)
        except Exception as exc:
            logger.exception("Tool failed | tool=%s", self.name)
            return failure_result(f"{self.error_prefix}: {exc}")

    @abc.abstractmethod
    async def run(self, args: ArgsT) -> ToolResult:
        """Do the tool's work for validated *args*.

        Raises:
            DatasetNotFoundError: When a required dataset does not resolve.
        """

    async def resolve(self, name: str | None) -> list[Feature] | None:
        """Resolve an optional dataset name (``None`` name resolves to ``None``)."""
        if not name:
            return None
        return await self._resolver.resolve_dataset(name)
