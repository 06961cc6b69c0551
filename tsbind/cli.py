# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
`tsbind` command line.

  tsbind plan <interface.json> [--config cfg.json] [--external MODULE=PATH]... [--jobs N] [--json]
  tsbind render "<type expr>" [--interface iface.json] [--config cfg.json] [--external ...] [--json]
  tsbind miscellany [--json]

Exit code 0 on success, 1 on any input or oracle error. Errors are printed as
`file:line:col: error: message` on stderr, or with `--json` as a single
`{"exit_code", "diagnostics"}` object on stdout.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from tsbind.config import BindgenConfig, load_config_json, parse_external_flag
from tsbind.core.diagnostics import Diagnostic
from tsbind.core.errors import OracleError
from tsbind.model.interface import Interface
from tsbind.model.loader_v0 import load_interface_json
from tsbind.model.type_parser import TypeExprError, TypeNamespace, parse_type_expr
from tsbind.oracle.context import OracleContext
from tsbind.oracle.miscellany import MISCELLANY_TABLE
from tsbind.oracle.oracle import TypeOracle
from tsbind.walker import walk_interface


class _Failed(Exception):
	def __init__(self, diagnostics: List[Diagnostic], source: Optional[str]) -> None:
		super().__init__(diagnostics[0].message if diagnostics else "failed")
		self.diagnostics = diagnostics
		self.source = source


def _build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="tsbind", description="TypeScript binding type oracle")
	sub = p.add_subparsers(dest="cmd", required=True)

	def _config_flags(sp: argparse.ArgumentParser) -> None:
		sp.add_argument("--config", type=Path, default=None, help="Path to a tsbind-config JSON file")
		sp.add_argument(
			"--external",
			action="append",
			default=[],
			metavar="MODULE=PATH",
			help="Import path for an external module's bindings (repeatable; overrides --config)",
		)
		sp.add_argument("--json", action="store_true", help="Emit machine-readable JSON")

	plan = sub.add_parser("plan", help="Resolve every type of an interface and list the helpers it needs")
	plan.add_argument("interface", type=Path, help="Path to a tsbind-interface JSON document")
	plan.add_argument("--jobs", type=int, default=None, help="Resolve declarations on N worker threads")
	_config_flags(plan)

	render = sub.add_parser("render", help="Render one type expression")
	render.add_argument("type_expr", help="Type expression, e.g. 'Map<string, sequence<i32?>>'")
	render.add_argument("--interface", type=Path, default=None, help="Interface whose declarations names may refer to")
	_config_flags(render)

	misc = sub.add_parser("miscellany", help="List the builtin miscellany catalog")
	misc.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
	return p


def _input_error(err: ValueError, phase: str, source: Optional[Path]) -> _Failed:
	diag = Diagnostic(message=str(err), phase=phase)
	if isinstance(err, TypeExprError):
		diag = Diagnostic(message=str(err), phase="type-expr", span=err.span, notes=[f"in: {err.text}"])
	return _Failed([diag], str(source) if source is not None else None)


def _load_config(args: argparse.Namespace) -> BindgenConfig:
	config = BindgenConfig()
	if args.config is not None:
		try:
			config = load_config_json(args.config)
		except (OSError, ValueError) as err:
			raise _input_error(ValueError(str(err)), "config", args.config) from err
	try:
		externals = dict(parse_external_flag(e) for e in args.external)
		return config.with_overrides(external_modules=externals, jobs=getattr(args, "jobs", None))
	except ValueError as err:
		raise _input_error(err, "config", None) from err


def _load_interface(path: Path) -> Interface:
	try:
		return load_interface_json(path)
	except OSError as err:
		raise _input_error(ValueError(str(err)), "interface", path) from err
	except ValueError as err:
		raise _input_error(err, "interface", path) from err


def _cmd_plan(args: argparse.Namespace) -> Dict[str, Any]:
	config = _load_config(args)
	iface = _load_interface(args.interface)
	oracle = TypeOracle(OracleContext(config=config))
	try:
		plan = walk_interface(iface, oracle)
	except OracleError as err:
		raise _Failed([err.to_diagnostic()], str(args.interface)) from err
	out = plan.to_json()
	if not args.json:
		for imp in plan.imports:
			print(imp.render())
		for h in plan.helpers:
			print(f"{h.canonical}\t{h.rendered}\t{h.ffi_converter}")
		print(f"fingerprint: {plan.fingerprint}")
	return out


def _cmd_render(args: argparse.Namespace) -> Dict[str, Any]:
	config = _load_config(args)
	ns = TypeNamespace()
	if args.interface is not None:
		ns = TypeNamespace(user_types=_load_interface(args.interface).user_types())
	try:
		desc = parse_type_expr(args.type_expr, ns)
	except TypeExprError as err:
		raise _input_error(err, "type-expr", None) from err
	oracle = TypeOracle(OracleContext(config=config))
	try:
		resolved = oracle.resolve(desc)
	except OracleError as err:
		raise _Failed([err.to_diagnostic()], None) from err
	out = {
		"rendered": resolved.rendered,
		"canonical": resolved.canonical,
		"ffi_converter": resolved.ffi_converter,
		"imports": [imp.render() for imp in oracle.imports()],
	}
	if not args.json:
		print(f"rendered:  {resolved.rendered}")
		print(f"canonical: {resolved.canonical}")
	return out


def _cmd_miscellany(args: argparse.Namespace) -> Dict[str, Any]:
	rows = [
		{
			"builtin_id": e.builtin_id.value,
			"canonical": e.canonical_tag,
			"rendered": e.rendered_name,
			"runtime_type": e.runtime_type,
		}
		for e in MISCELLANY_TABLE
	]
	if not args.json:
		for r in rows:
			print(f"{r['builtin_id']}\t{r['canonical']}\t{r['rendered']}")
	return {"miscellany": rows}


_COMMANDS = {
	"plan": _cmd_plan,
	"render": _cmd_render,
	"miscellany": _cmd_miscellany,
}


def main(argv: list[str] | None = None) -> int:
	parser = _build_parser()
	args = parser.parse_args(argv)
	try:
		result = _COMMANDS[args.cmd](args)
	except _Failed as failed:
		if args.json:
			payload = {
				"exit_code": 1,
				"diagnostics": [d.to_json(default_file=failed.source) for d in failed.diagnostics],
			}
			print(json.dumps(payload))
		else:
			for d in failed.diagnostics:
				print(d.format_human(default_file=failed.source), file=sys.stderr)
		return 1
	if args.json:
		print(json.dumps({"exit_code": 0, **result}))
	return 0


if __name__ == "__main__":
	sys.exit(main())
