"""
Extension loading.

An extension is any importable module defining

    def tokens_register(registry: TokenRegistry) -> None: ...

which contributes its tokens to the registry it is given.
"""

import importlib
from types import ModuleType
from typing import Callable, Final, Iterable
from cachetokens.lib.errors import RegistrationError
from cachetokens.lib.log import LOG
from cachetokens.lib.registry import TokenRegistry

REGISTER_FUNCTION: Final[str] = "tokens_register"


def extension_load(module: str, registry: TokenRegistry) -> int:
    """Import one extension module and let it register its tokens.

    Args:
        module: Dotted module path
        registry: Registry the extension registers into

    Returns:
        int: Number of tokens the extension added

    Raises:
        RegistrationError: If the module cannot be imported or has no
            register function; errors raised while registering propagate
    """
    try:
        extension: ModuleType = importlib.import_module(module)
    except ImportError as e:
        raise RegistrationError(f"Cannot import extension {module!r}: {e}") from e

    register: Callable[[TokenRegistry], None] | None = getattr(
        extension, REGISTER_FUNCTION, None
    )
    if not callable(register):
        raise RegistrationError(
            f"Extension {module!r} does not define {REGISTER_FUNCTION}(registry)"
        )

    before: int = len(registry)
    register(registry)
    added: int = len(registry) - before
    LOG(f"Extension '{module}' registered {added} tokens")
    return added


def extensions_load(modules: Iterable[str], registry: TokenRegistry) -> int:
    """Load several extensions in order; returns the total tokens added."""
    return sum(extension_load(module, registry) for module in modules)
