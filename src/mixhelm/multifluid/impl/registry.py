from typing import Any, Callable, Dict, List

from mixhelm.common.exceptions import UnknownTermType

# family -> type name -> factory(term: dict) -> list of term kinds
REGISTRY: Dict[str, Dict[str, Callable[[Dict[str, Any]], List[Any]]]] = {
    "eos": {},
    "departure": {},
}


def register(family: str, *names: str):
    """Register a term factory under one or more ``type`` names of ``family``."""
    def deco(fn):
        for name in names:
            REGISTRY[family][name] = fn
        return fn
    return deco


def supported_types(family: str) -> List[str]:
    return list(REGISTRY[family])


def check_type(family: str, name: str) -> None:
    if name not in REGISTRY[family]:
        options = ",".join(supported_types(family))
        raise UnknownTermType(f"Bad term type: {name}; allowed types are: {{{options}}}")


def build(family: str, term: Dict[str, Any]) -> List[Any]:
    name = term.get("type")
    check_type(family, name)
    return REGISTRY[family][name](term)
