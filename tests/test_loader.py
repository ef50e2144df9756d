from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from robocourse.exceptions import ConfigFetchError, YamlParseError
from robocourse.loader import YamlDocumentLoader, document_name
from robocourse.parser import ParserBootstrap


@dataclass
class _FakeSite:
    files: dict[str, str] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    async def get_text(self, path: str) -> str:
        self.calls.append(path)
        if path not in self.files:
            raise ConfigFetchError(f"HTTP error! status: 404 ({path})", status_code=404, path=path)
        return self.files[path]


async def _ready_parser() -> ParserBootstrap:
    bootstrap = ParserBootstrap()
    await bootstrap.wait_ready(timeout=5.0)
    return bootstrap


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("config/years/2023/robot.yaml", "robot"),
        ("config/years/Test/course.yml", "course"),
        ("rules.yaml", "rules"),
        ("config/years/2023/notes.txt", "notes.txt"),
    ],
)
def test_document_name(path: str, expected: str) -> None:
    assert document_name(path) == expected


@pytest.mark.asyncio
async def test_load_document_parses_fetched_text() -> None:
    site = _FakeSite(files={"config/years/2024/robot.yaml": "wheels: 4\nname: alpha\n"})
    loader = YamlDocumentLoader(site, await _ready_parser(), year="2024")

    assert await loader.load_document("config/years/2024/robot.yaml") == {"wheels": 4, "name": "alpha"}


@pytest.mark.asyncio
async def test_load_document_reraises_fetch_error() -> None:
    loader = YamlDocumentLoader(_FakeSite(), await _ready_parser())

    with pytest.raises(ConfigFetchError) as exc_info:
        await loader.load_document("config/years/2024/robot.yaml")

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_load_documents_skips_failures_and_reports_them() -> None:
    site = _FakeSite(
        files={
            "config/years/2023/course.yaml": "image:\n  filename: track.png\n",
            "config/years/2023/rules.yaml": "laps: [1, 2\n",
        }
    )
    loader = YamlDocumentLoader(site, await _ready_parser(), year="2023")

    documents, warnings = await loader.load_documents(
        [
            "config/years/2023/robot.yaml",
            "config/years/2023/course.yaml",
            "config/years/2023/rules.yaml",
        ]
    )

    assert documents == {"course": {"image": {"filename": "track.png"}}}
    assert [(w.year, w.document) for w in warnings] == [("2023", "robot"), ("2023", "rules")]
    assert "404" in warnings[0].message
    assert site.calls == [
        "config/years/2023/robot.yaml",
        "config/years/2023/course.yaml",
        "config/years/2023/rules.yaml",
    ]


@pytest.mark.asyncio
async def test_load_documents_with_unloaded_parser_skips_everything() -> None:
    site = _FakeSite(files={"robot.yaml": "a: 1\n"})
    loader = YamlDocumentLoader(site, ParserBootstrap())

    documents, warnings = await loader.load_documents(["robot.yaml"])

    assert documents == {}
    assert len(warnings) == 1


@pytest.mark.asyncio
async def test_parse_error_propagates_from_load_document() -> None:
    site = _FakeSite(files={"robot.yaml": "a: [\n"})
    loader = YamlDocumentLoader(site, await _ready_parser())

    with pytest.raises(YamlParseError):
        await loader.load_document("robot.yaml")
