"""Tests for autodoc.indexing."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from autodoc.config import AutodocConfig
from autodoc.errors import DocumentReadError
from autodoc import indexing
from autodoc.indexing import DirectoryIndexer, document_directories
from tests._fixtures.tree_builder import TreeBuilder


def _config(root: Path, **kwargs) -> AutodocConfig:
    return AutodocConfig(root=root, **kwargs)


def _fail_reading(monkeypatch, name: str) -> None:
    extract = indexing.extract_document

    def _extract(title, stream, **kwargs):
        if title.endswith(f"/{name}"):
            raise DocumentReadError(title, OSError("input/output error"))
        return extract(title, stream, **kwargs)

    monkeypatch.setattr(indexing, "extract_document", _extract)


def _layout(tree_builder: TreeBuilder) -> None:
    tree_builder.write(
        {
            "lib/math.js": """
                // > sum(a,b,c)
                // Sums values.
                function sum(a,b,c) {}
            """,
            "lib/plain.js": "var nothing = 1;\n",
            "lib/util/strings.js": """
                // > pad(s)
                function pad(s) {}
            """,
            "lib/util/README.txt": "// > ignored(x)\n",
            "lib/empty/plain.js": "var x;\n",
            "lib/tests/math_test.js": "// > shouldNotAppear()\n",
        }
    )


def test_document_directories_writes_tree(tree_builder: TreeBuilder) -> None:
    _layout(tree_builder)
    root = tree_builder.path()
    out = root / "docs"

    index_path = document_directories(
        "proj", out, [root / "lib"], config=_config(root)
    )

    assert index_path == out / "index.md"
    assert index_path.read_text(encoding="utf-8") == "## Index of proj\n\n* [lib](lib/index.md)"
    assert (out / "lib" / "index.md").read_text(encoding="utf-8") == (
        "## Index of proj/lib\n"
        "\n<sub><sup>[Back](../index.md)</sup></sub>\n"
        "\n* [util](util/index.md)"
        "\n* [math.js](math.js.md)"
    )
    math_doc = (out / "lib" / "math.js.md").read_text(encoding="utf-8")
    assert math_doc.startswith('## proj/lib/math.js<a name="__top"></a>')
    assert "Sums values." in math_doc

    strings_doc = (out / "lib" / "util" / "strings.js.md").read_text(encoding="utf-8")
    assert strings_doc.startswith("## proj/lib/util/strings.js")

    assert not (out / "lib" / "plain.js.md").exists()
    assert not (out / "lib" / "empty").exists()
    assert not (out / "lib" / "tests").exists()
    assert not (out / "lib" / "util" / "README.txt.md").exists()


def test_stats_track_documented_and_skipped(tree_builder: TreeBuilder) -> None:
    _layout(tree_builder)
    root = tree_builder.path()
    indexer = DirectoryIndexer(_config(root))

    indexer.document_directories("proj", root / "docs", [root / "lib"])

    documented = {path.name for path in indexer.stats.documented}
    skipped = {path.relative_to(root).as_posix() for path in indexer.stats.skipped}
    assert documented == {"math.js", "strings.js"}
    assert skipped == {"lib/plain.js", "lib/empty/plain.js"}


def test_root_index_written_even_without_docs(tree_builder: TreeBuilder) -> None:
    tree_builder.write({"src/a.js": "var a;\n"})
    root = tree_builder.path()

    index_path = document_directories("proj", root / "out", [root / "src"], config=_config(root))

    assert index_path.read_text(encoding="utf-8") == "## Index of proj\n"
    assert not (root / "out" / "src").exists()


def test_extensions_and_skip_dirs_are_configurable(tree_builder: TreeBuilder) -> None:
    tree_builder.write(
        {
            "src/a.ts": "// > a()\n",
            "src/b.js": "// > b()\n",
            "src/tests/c.ts": "// > c()\n",
            "src/vendor/d.ts": "// > d()\n",
        }
    )
    root = tree_builder.path()
    config = _config(root, extensions=[".ts"], skip_dirs=["vendor"], fence_language="ts")

    document_directories("proj", root / "docs", [root / "src"], config=config)

    out = root / "docs" / "src"
    assert (out / "a.ts.md").exists()
    assert not (out / "b.js.md").exists()
    assert (out / "tests" / "c.ts.md").exists()
    assert not (out / "vendor").exists()
    assert "```ts\na()\n```" in (out / "a.ts.md").read_text(encoding="utf-8")


def test_exclude_paths_skip_matching_files_and_dirs(tree_builder: TreeBuilder) -> None:
    tree_builder.write(
        {
            "src/app.js": "// > app()\n",
            "src/app.min.js": "// > minified()\n",
            "src/generated/out.js": "// > out()\n",
            "src/keep/generated.js": "// > keep()\n",
        }
    )
    root = tree_builder.path()
    config = _config(root, exclude_paths=["*.min.js", "/generated/"])

    document_directories("proj", root / "docs", [root / "src"], config=config)

    out = root / "docs" / "src"
    assert (out / "app.js.md").exists()
    assert not (out / "app.min.js.md").exists()
    assert not (out / "generated").exists()
    assert (out / "keep" / "generated.js.md").exists()


def test_output_directory_inside_source_is_not_walked(tree_builder: TreeBuilder) -> None:
    tree_builder.write({"a.js": "// > a()\n", "docs/stale.js": "// > stale()\n"})
    root = tree_builder.path()

    document_directories("proj", root / "docs", [root], config=_config(root))

    assert (root / "docs" / "project" / "a.js.md").exists()
    assert not (root / "docs" / "project" / "docs").exists()


def test_parallel_workers_produce_same_output(tree_builder: TreeBuilder) -> None:
    files = {f"src/mod{i}.js": f"// > mod{i}.run()\n// Runs {i}.\n" for i in range(8)}
    tree_builder.write(files)
    root = tree_builder.path()

    document_directories("proj", root / "serial", [root / "src"], config=_config(root))
    document_directories("proj", root / "parallel", [root / "src"], config=_config(root, workers=4))

    for i in range(8):
        name = f"mod{i}.js.md"
        assert (root / "serial" / "src" / name).read_bytes() == (
            root / "parallel" / "src" / name
        ).read_bytes()
    assert (root / "serial" / "src" / "index.md").read_bytes() == (
        root / "parallel" / "src" / "index.md"
    ).read_bytes()


def test_read_fault_aborts_run(tree_builder: TreeBuilder, monkeypatch) -> None:
    tree_builder.write({"src/good.js": "// > good()\n", "src/bad.js": "// > bad()\n"})
    root = tree_builder.path()
    _fail_reading(monkeypatch, "bad.js")

    with pytest.raises(DocumentReadError):
        document_directories("proj", root / "docs", [root / "src"], config=_config(root))


def test_keep_going_skips_faulty_files(tree_builder: TreeBuilder, monkeypatch) -> None:
    tree_builder.write({"src/good.js": "// > good()\n", "src/bad.js": "// > bad()\n"})
    root = tree_builder.path()
    _fail_reading(monkeypatch, "bad.js")
    indexer = DirectoryIndexer(_config(root), keep_going=True)

    indexer.document_directories("proj", root / "docs", [root / "src"])

    assert [path.name for path in indexer.stats.failed] == ["bad.js"]
    assert (root / "docs" / "src" / "index.md").read_text(encoding="utf-8").endswith(
        "\n* [good.js](good.js.md)"
    )


def test_directory_symlinks_are_not_followed(tree_builder: TreeBuilder) -> None:
    tree_builder.write({"lib/a.js": "// > a()\n"})
    root = tree_builder.path()
    try:
        os.symlink(root / "lib", root / "lib" / "loop", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not supported here")

    document_directories("proj", root / "docs", [root / "lib"], config=_config(root))

    assert (root / "docs" / "lib" / "a.js.md").exists()
    assert not (root / "docs" / "lib" / "loop").exists()
    assert "loop" not in (root / "docs" / "lib" / "index.md").read_text(encoding="utf-8")


def test_non_utf8_source_is_documented(tree_builder: TreeBuilder) -> None:
    tree_builder.write({"lib/a.js": "// > a()\n"})
    root = tree_builder.path()
    (root / "lib" / "b.js").write_bytes(b"// > b()\n// caf\xe9\nvar s = '\xff';\n")

    document_directories("proj", root / "docs", [root / "lib"], config=_config(root))

    assert b"\ncaf\xe9\n" in (root / "docs" / "lib" / "b.js.md").read_bytes()
    assert (root / "docs" / "lib" / "index.md").read_text(encoding="utf-8").endswith(
        "\n* [a.js](a.js.md)\n* [b.js](b.js.md)"
    )
