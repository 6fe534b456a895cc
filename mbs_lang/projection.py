from abc import ABC, abstractmethod
from typing import Any, List, Tuple

from .models import (
    AutoPrefixedGlobalVariable,
    GlobalVariable,
    Identifier,
    LocalVariable,
    Number,
    PositionRegister,
    Register,
    Script,
    Statement,
    StatementParameter,
    StringRegister,
    TypedId,
)
from .symbols import SymbolTable


class Projection(ABC):
    """Renders a parsed script into the values a host consumes."""

    @abstractmethod
    def project_script(self, script: Script) -> Any: ...

    @abstractmethod
    def project_statement(self, statement: Statement) -> Any: ...

    @abstractmethod
    def project_parameter(
        self, parameter: StatementParameter, symbols: SymbolTable
    ) -> Any: ...


class ModsysProjection(Projection):
    """Projection into module system values: tuples, lists, strings and ints.

    Names missing from the symbol table project to `UNRESOLVED`.
    """

    def project_script(self, script: Script) -> Tuple[str, List[Any]]:
        return (script.name, [self.project_statement(s) for s in script.statements])

    def project_statement(self, statement: Statement) -> Any:
        operation = statement.symbols.resolve(statement.operation)
        if not statement.parameters:
            return operation
        params = [self.project_parameter(p, statement.symbols) for p in statement.parameters]
        return tuple([operation] + params)

    def project_parameter(
        self, parameter: StatementParameter, symbols: SymbolTable
    ) -> Any:
        if isinstance(parameter, Identifier):
            return symbols.resolve(parameter.name)
        if isinstance(parameter, Register):
            return symbols.resolve(parameter.key)
        if isinstance(parameter, (StringRegister, PositionRegister)):
            return parameter.code
        if isinstance(
            parameter,
            (LocalVariable, GlobalVariable, AutoPrefixedGlobalVariable, TypedId),
        ):
            return parameter.render()
        if isinstance(parameter, Number):
            return parameter.value
        raise TypeError(f"Unknown statement parameter: {parameter!r}")
