"""Vibe Coding scaffolder -- runs the framework generators.

Quick usage::

    from vibecode.scaffolder import ProjectScaffolder, stage_project

    scaffolder = ProjectScaffolder()
    placeholder = await stage_project(scaffolder, Framework.REACT, "/tmp/demo", "demo")
"""

from vibecode.scaffolder.frameworks import FRAMEWORK_SPECS, FrameworkSpec, get_spec
from vibecode.scaffolder.generator import ProjectScaffolder, merge_into, prepare_staging, stage_project
from vibecode.scaffolder.templates import TemplateRenderer

__all__ = [
    "FRAMEWORK_SPECS",
    "FrameworkSpec",
    "ProjectScaffolder",
    "TemplateRenderer",
    "get_spec",
    "merge_into",
    "prepare_staging",
    "stage_project",
]
