from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

from fpslang.errors import FpsError
from fpslang.types import ErrorVal


class Environment:
    """Stack of lexical scopes mapping identifiers to values.

    Scope 0 is the root scope shared by every frame. A block pushes a child
    scope for the duration of its body; the parent of scope ``n`` is scope
    ``n - 1``.
    """
    def __init__(self):
        self.scopes: List[Dict[str, Any]] = [{}]

    @property
    def depth(self) -> int:
        return len(self.scopes)

    @property
    def values(self) -> Dict[str, Any]:
        # bindings of the innermost scope
        return self.scopes[-1]

    def get(self, name: str) -> Any:
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        raise FpsError(ErrorVal('NotDeclared', f"variable '{name}' is not yet declared"))

    def declare(self, name: str, value: Any):
        if name in self.scopes[-1]:
            raise FpsError(ErrorVal('AlreadyDeclared', f"cannot declare variable '{name}' as it is already defined"))
        self.scopes[-1][name] = value

    def assign(self, name: str, value: Any):
        # Only rebinds an existing name, never creates one
        for scope in reversed(self.scopes):
            if name in scope:
                scope[name] = value
                return
        raise FpsError(ErrorVal('NotDeclared', f"variable '{name}' is not yet declared"))

    @contextmanager
    def child_scope(self) -> Iterator['Environment']:
        self.scopes.append({})
        try:
            yield self
        finally:
            self.scopes.pop()
