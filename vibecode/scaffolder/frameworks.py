"""Per-framework generator commands and placeholder locations."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

from vibecode.config import Framework


@dataclass(frozen=True)
class FrameworkSpec:
    """How to scaffold one framework into the current directory."""

    framework: Framework
    generator_command: tuple[str, ...]
    placeholder_path: PurePosixPath
    placeholder_template: str


FRAMEWORK_SPECS: dict[Framework, FrameworkSpec] = {
    Framework.REACT: FrameworkSpec(
        framework=Framework.REACT,
        generator_command=(
            "npm", "create", "--yes", "vite@latest", ".",
            "--", "--template", "react-ts", "--overwrite", "--no-interactive",
        ),
        placeholder_path=PurePosixPath("src/App.tsx"),
        placeholder_template="react_app.tsx.j2",
    ),
    Framework.NEXTJS: FrameworkSpec(
        framework=Framework.NEXTJS,
        generator_command=(
            "npx", "--yes", "create-next-app@latest", ".",
            "--ts", "--app", "--src-dir", "--use-npm", "--yes",
        ),
        placeholder_path=PurePosixPath("src/app/page.tsx"),
        placeholder_template="nextjs_page.tsx.j2",
    ),
}


def get_spec(framework: Framework) -> FrameworkSpec:
    return FRAMEWORK_SPECS[framework]
