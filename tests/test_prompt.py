# tests/test_prompt.py
import pytest

from chatdocs.core.prompts import PromptBuilder
from chatdocs.core.snapshot import collect_docs, render_docs


@pytest.fixture
def builder():
    return PromptBuilder()


@pytest.fixture
def docs_tree(tmp_path):
    docs = tmp_path / "docs"
    (docs / "guide").mkdir(parents=True)
    (docs / "index.md").write_text("# Index\n", encoding="utf-8")
    (docs / "guide" / "usage.md").write_text("Run it.", encoding="utf-8")
    (docs / ".hidden.md").write_text("secret", encoding="utf-8")
    (docs / ".cache").mkdir()
    (docs / ".cache" / "x.md").write_text("cached", encoding="utf-8")
    return tmp_path


def test_resolve_template_path_alias(builder):
    assert builder._resolve_template_path("suggest") == "suggest.md.j2"
    assert builder._resolve_template_path("update") == "update.md.j2"
    assert builder._resolve_template_path("custom") == "custom.j2"


def test_unknown_template(builder):
    with pytest.raises(FileNotFoundError):
        builder.render("does-not-exist")


def test_suggest_prompt_layout(builder):
    prompt = builder.suggest_prompt("diff --git a/x b/x", "docs/a.md\n---\nA\n\n---")
    assert prompt == (
        "PATCH:\n"
        "diff --git a/x b/x\n"
        "\n"
        "EXISTING DOCUMENTATION:\n"
        "docs/a.md\n---\nA\n\n---"
    )


def test_update_prompt_layout(builder):
    prompt = builder.update_prompt("DOCS", "Add a section about X.")
    assert prompt == (
        "EXISTING DOCUMENTATION:\n"
        "DOCS\n"
        "\n"
        "SUGGESTED CHANGES:\n"
        "Add a section about X."
    )


def test_prompt_text_is_not_escaped(builder):
    prompt = builder.suggest_prompt("if a < b && c > d: {{ x }}", "")
    assert "if a < b && c > d: {{ x }}" in prompt


# --- snapshot ---

def test_collect_docs_sorted_and_skips_hidden(docs_tree):
    names = [name for name, _ in collect_docs(docs_tree)]
    assert names == ["docs/guide/usage.md", "docs/index.md"]


def test_render_docs_format(docs_tree):
    rendered = render_docs(docs_tree)
    assert rendered == (
        "docs/guide/usage.md\n---\nRun it.\n\n---\n"
        "docs/index.md\n---\n# Index\n\n\n---"
    )


def test_render_docs_missing_directory(tmp_path):
    assert render_docs(tmp_path) == ""


def test_render_docs_skips_binary_files(tmp_path):
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe\x00")
    (docs / "a.md").write_text("A", encoding="utf-8")
    assert render_docs(tmp_path) == "docs/a.md\n---\nA\n\n---"


def test_render_docs_custom_directory(tmp_path):
    (tmp_path / "handbook").mkdir()
    (tmp_path / "handbook" / "a.md").write_text("A", encoding="utf-8")
    assert render_docs(tmp_path, "handbook").startswith("handbook/a.md\n")
