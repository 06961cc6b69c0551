"""
tsbind.model: the interface model the oracle reads, plus its v0 JSON loader.
"""

from .interface import Interface
from .loader_v0 import interface_from_obj, load_interface_json
from .type_parser import TypeExprError, TypeNamespace, parse_type_expr

__all__ = [
	"Interface",
	"interface_from_obj",
	"load_interface_json",
	"TypeExprError",
	"TypeNamespace",
	"parse_type_expr",
]
