from __future__ import annotations
from typing import Dict, Type
from .base import BaseReformulator

# Method name -> reformulator class, filled by @register_method
METHODS: Dict[str, Type[BaseReformulator]] = {}

def register_method(name: str):
    def deco(cls: Type[BaseReformulator]):
        if name in METHODS and METHODS[name] is not cls:
            raise ValueError(f"Method '{name}' is already registered by {METHODS[name].__name__}")
        METHODS[name] = cls
        return cls
    return deco

def get_method(name: str) -> Type[BaseReformulator]:
    if name not in METHODS:
        raise ValueError(f"Unknown method: {name}. Available: {list(METHODS.keys())}")
    return METHODS[name]
