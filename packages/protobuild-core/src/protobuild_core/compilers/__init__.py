"""External compiler wrappers used by the build orchestrator.

- ProtocInvoker: one protoc call per schema file
- JavaCompiler: javac over generated and project Java sources
"""

from __future__ import annotations

from protobuild_core.compilers.javac import GENERATED_SOURCE_OPTIONS, JavaCompiler, java_sources
from protobuild_core.compilers.protoc import ProtocInvoker, protoc_args

__all__: list[str] = [
    "ProtocInvoker",
    "protoc_args",
    "JavaCompiler",
    "java_sources",
    "GENERATED_SOURCE_OPTIONS",
]
