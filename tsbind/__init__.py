# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
tsbind: TypeScript binding type oracle.

Given the types of a native module's exported interface, decides how each type
is spelled in generated TypeScript and which canonical name keys its generated
lowering/lifting helpers. The CLI entrypoint is `tsbind.cli:main`.
"""

__all__ = []
