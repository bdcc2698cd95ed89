"""MojoGL Resolver - resolves OpenGL-family registries into per-API namespaces."""

__version__ = "0.1.0"

from .errors import GenerationError
from .processor import FamilyInput, OutputData, process_spec, run_families
from .settings import GL_SETTINGS, GLX_SETTINGS, WGL_SETTINGS, GeneratorSettings
from .types import Documentation, OutputApi, Specification

__all__ = [
    "Documentation",
    "FamilyInput",
    "GenerationError",
    "GeneratorSettings",
    "GL_SETTINGS",
    "GLX_SETTINGS",
    "OutputApi",
    "OutputData",
    "Specification",
    "WGL_SETTINGS",
    "process_spec",
    "run_families",
]
