# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import copy
from typing import Any, Callable

import pytest

_SAMPLE_INTERFACE: dict[str, Any] = {
	"format": "tsbind-interface",
	"version": 0,
	"namespace": "demo",
	"records": [
		{
			"name": "point",
			"fields": [
				{"name": "x", "type": "f64"},
				{"name": "y", "type": "f64"},
				{"name": "label", "type": "string?"},
			],
		},
		{
			"name": "Reading",
			"fields": [
				{"name": "taken_at", "type": "timestamp"},
				{"name": "window", "type": "duration"},
				{"name": "values", "type": "sequence<i32?>"},
			],
		},
	],
	"enums": [
		{
			"name": "Shape",
			"variants": [
				{"name": "Circle", "fields": [{"name": "center", "type": "point"}, {"name": "radius", "type": "f64"}]},
				{"name": "Polygon", "fields": [{"name": "points", "type": "[point]"}]},
			],
		},
	],
	"errors": [
		{"name": "ArithError", "flat": True, "variants": [{"name": "Overflow"}]},
		{"name": "StoreError", "variants": [{"name": "Missing", "fields": [{"name": "key", "type": "string"}]}]},
	],
	"objects": [
		{
			"name": "Counter",
			"constructors": [{"name": "new", "arguments": [{"name": "start", "type": "u64"}]}],
			"methods": [
				{"name": "incr", "arguments": [{"name": "by", "type": "u64"}], "return_type": "u64", "throws": "ArithError"},
				{"name": "history", "return_type": "sequence<i32?>"},
			],
		},
	],
	"callback_interfaces": [
		{"name": "Listener", "methods": [{"name": "on_reading", "arguments": [{"name": "r", "type": "Reading"}]}]},
	],
	"custom_types": [
		{"name": "Url", "builtin": "string"},
	],
	"functions": [
		{
			"name": "summarize",
			"arguments": [{"name": "data", "type": "record<string, sequence<i32?>>"}],
			"return_type": "Map<string, i64>",
		},
		{
			"name": "lookup",
			"arguments": [{"name": "key", "type": "string"}, {"name": "where", "type": "Url"}],
			"return_type": "Reading?",
			"throws": "StoreError",
		},
		{"name": "make_counter", "return_type": "Counter"},
		{"name": "subscribe", "arguments": [{"name": "listener", "type": "Listener"}]},
	],
}


@pytest.fixture
def interface_obj() -> Callable[..., dict[str, Any]]:
	"""
	Factory for a sample interface document.

	Keyword arguments replace top-level keys, so tests can add or override a
	single declaration list without re-spelling the whole document.
	"""

	def _make(**overrides: Any) -> dict[str, Any]:
		obj = copy.deepcopy(_SAMPLE_INTERFACE)
		obj.update(overrides)
		return obj

	return _make
