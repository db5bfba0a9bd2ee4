"""Code generation backends.

CodeGenerator is the seam the generation service depends on. The only
implementation is MockCodeGenerator, which waits a fixed delay and then
returns a canned page chosen by keywords in the prompt. A generation, once
started, always resolves: there is no timeout and no cancellation.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from typing import Protocol

import structlog

logger = structlog.get_logger(__name__)


@dataclass
class GeneratedCode:
    """Generated source keyed by file name."""

    frontend_files: dict[str, str] = field(default_factory=dict)
    backend_files: dict[str, str] = field(default_factory=dict)

    def frontend_json(self) -> str:
        return json.dumps(self.frontend_files)

    def backend_json(self) -> str:
        return json.dumps(self.backend_files)


class CodeGenerator(Protocol):
    async def generate(self, prompt: str, ui_library: str, generation_type: str) -> GeneratedCode:
        ...


# ── Canned pages ────────────────────────────────────────────────────────────

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <script src="https://cdn.tailwindcss.com"></script>
</head>
<body class="{body_class}">
{body}
</body>
</html>"""

_LANDING_BODY = """    <nav class="bg-white shadow-sm border-b">
        <div class="max-w-7xl mx-auto px-4 flex justify-between h-16 items-center">
            <span class="text-xl font-semibold">SaaSify</span>
            <button class="bg-blue-600 text-white px-4 py-2 rounded-lg">Get Started</button>
        </div>
    </nav>
    <section class="py-20 text-center">
        <h1 class="text-5xl font-bold text-gray-900 mb-6">Build Amazing Products 10x Faster</h1>
        <p class="text-xl text-gray-600">Streamline your workflow and ship faster than ever.</p>
    </section>"""

_DIRECTORY_BODY = """    <header class="bg-white shadow-sm border-b">
        <div class="max-w-7xl mx-auto px-4 h-16 flex items-center">
            <span class="text-xl font-semibold">Business Directory</span>
        </div>
    </header>
    <main class="max-w-7xl mx-auto px-4 py-12">
        <input class="w-full border rounded-lg px-4 py-3" placeholder="Search businesses...">
        <div class="grid md:grid-cols-3 gap-6 mt-8"></div>
    </main>"""

_PORTFOLIO_BODY = """    <nav class="fixed top-0 w-full bg-black/80 border-b border-gray-800">
        <div class="max-w-6xl mx-auto px-6 py-4 text-2xl font-bold">Alex Chen</div>
    </nav>
    <main class="pt-20 min-h-screen flex items-center justify-center">
        <h1 class="text-6xl font-bold">Creative Designer</h1>
    </main>"""

_GENERIC_BODY = """    <div class="container mx-auto p-4">
        <h1 class="text-2xl font-bold">Generated App</h1>
        <p>This app was generated from: {prompt}</p>
    </div>"""

# (keywords, title, body class, body); first match wins.
_PAGES: list[tuple[tuple[str, ...], str, str, str]] = [
    (("landing", "saas"), "SaaS Landing Page", "bg-gray-50", _LANDING_BODY),
    (("directory",), "Business Directory", "bg-gray-50", _DIRECTORY_BODY),
    (("portfolio",), "Creative Portfolio", "bg-black text-white", _PORTFOLIO_BODY),
]

_BACKEND_TEMPLATE = """const express = require('express');
const app = express();

app.get('/', (req, res) => {{
  res.json({{ message: {message} }});
}});

app.listen(3000, () => {{
  console.log('Server running on port 3000');
}});"""


def render_page(prompt: str) -> str:
    """Pick the canned page whose keywords appear in the prompt."""
    lowered = prompt.lower()
    for keywords, title, body_class, body in _PAGES:
        if any(k in lowered for k in keywords):
            return _PAGE.format(title=title, body_class=body_class, body=body)
    return _PAGE.format(
        title="Generated App",
        body_class="bg-white",
        body=_GENERIC_BODY.format(prompt=prompt),
    )


class MockCodeGenerator:
    """Stand-in for a real code-generation service.

    Args:
        delay_seconds: Simulated generation time (awaited, so other requests
            keep being served meanwhile).
    """

    def __init__(self, delay_seconds: float = 1.0) -> None:
        self._delay = delay_seconds

    async def generate(self, prompt: str, ui_library: str, generation_type: str) -> GeneratedCode:
        if self._delay > 0:
            await asyncio.sleep(self._delay)

        code = GeneratedCode(
            frontend_files={
                "index.html": render_page(prompt),
                "package.json": json.dumps(
                    {
                        "name": "generated-app",
                        "dependencies": {"react": "^18.0.0", "react-dom": "^18.0.0"},
                    }
                ),
            }
        )
        if generation_type != "frontend":
            code.backend_files["index.js"] = _BACKEND_TEMPLATE.format(
                message=json.dumps(f"Generated API for: {prompt}")
            )

        logger.info(
            "codegen.mock_generated",
            ui_library=ui_library,
            generation_type=generation_type,
            files=len(code.frontend_files) + len(code.backend_files),
        )
        return code
