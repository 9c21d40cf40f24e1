"""Tests for the command-line interface."""
import pytest
from rich.console import Console
from typer.testing import CliRunner

from zhixia.cli.main import app, get_store
from zhixia.config import get_settings
from zhixia.utils.logging import setup_logging


runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(monkeypatch, temp_dir):
    """Run every command against a temp storage file and home directory."""
    monkeypatch.setenv("HOME", str(temp_dir))
    monkeypatch.setenv("ZHIXIA_DATA_FILE", str(temp_dir / "storage.json"))
    monkeypatch.setenv("ZHIXIA_ASSIST_DELAY", "0")
    monkeypatch.setattr("zhixia.cli.main.console", Console(width=200))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    setup_logging(log_file=temp_dir / "restored.log", level="DEBUG")


def invoke(*args, input=None):
    return runner.invoke(app, list(args), input=input)


class TestProjectCommands:

    def test_no_projects(self):
        result = invoke("projects")
        assert result.exit_code == 0
        assert "No projects found" in result.output

    def test_new_and_list(self):
        result = invoke("new", "My Novel")
        assert result.exit_code == 0
        assert "Created project: My Novel" in result.output

        projects = get_store().list_projects()
        assert [p.title for p in projects] == ["My Novel"]

        listing = invoke("projects")
        assert listing.exit_code == 0
        assert "My Novel" in listing.output

    def test_new_blank_title_fails(self):
        result = invoke("new", "  ")
        assert result.exit_code == 1
        assert get_store().list_projects() == []

    def test_rename(self):
        project = get_store().create_project("Old")

        result = invoke("rename", project.id, "New")

        assert result.exit_code == 0
        assert get_store().get_project(project.id).title == "New"

    def test_rename_unknown(self):
        result = invoke("rename", "missing", "New")
        assert result.exit_code == 0
        assert "nothing renamed" in result.output

    def test_delete_declined(self):
        project = get_store().create_project("Keep")

        result = invoke("delete", project.id, input="n\n")

        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert get_store().get_project(project.id) is not None

    def test_delete_unknown(self):
        result = invoke("delete", "missing", "--yes")

        assert result.exit_code == 0
        assert "nothing deleted" in result.output
        assert "Deleted project" not in result.output

    def test_delete_with_yes(self):
        project = get_store().create_project("Drop")

        result = invoke("delete", project.id, "--yes")

        assert result.exit_code == 0
        assert get_store().list_projects() == []


class TestChapterCommands:

    @pytest.fixture
    def project_id(self):
        return get_store().create_project("Novel").id

    def test_add_and_list(self, project_id):
        assert invoke("add-chapter", project_id).exit_code == 0
        assert invoke("add-chapter", project_id).exit_code == 0

        chapters = get_store().get_project(project_id).chapters
        assert [c.title for c in chapters] == ["第1章", "第2章"]

        result = invoke("chapters", project_id, "--desc")
        assert result.exit_code == 0
        assert result.output.index("第2章") < result.output.index("第1章")

    def test_chapters_unknown_project(self):
        result = invoke("chapters", "missing")
        assert result.exit_code == 1
        assert "Project not found" in result.output

    def test_edit_by_position(self, project_id, temp_dir):
        invoke("add-chapter", project_id)
        invoke("add-chapter", project_id)
        source = temp_dir / "chapter.txt"
        source.write_text("月光如水", encoding='utf-8')

        result = invoke("edit-chapter", project_id, "2", "--title", "雨夜", "--file", str(source))

        assert result.exit_code == 0
        project = get_store().get_project(project_id)
        assert project.chapters[1].title == "雨夜"
        assert project.chapters[1].content == "月光如水"
        assert project.word_count == 4

    def test_edit_rejects_content_and_file(self, project_id, temp_dir):
        invoke("add-chapter", project_id)
        result = invoke(
            "edit-chapter", project_id, "1",
            "--content", "x", "--file", str(temp_dir / "f.txt")
        )
        assert result.exit_code == 1

    def test_edit_unknown_chapter(self, project_id):
        result = invoke("edit-chapter", project_id, "9", "--content", "x")
        assert result.exit_code == 1
        assert "Chapter not found" in result.output

    def test_delete_chapter_renumbers(self, project_id):
        for _ in range(3):
            invoke("add-chapter", project_id)
        middle = get_store().get_project(project_id).chapters[1].id

        result = invoke("delete-chapter", project_id, middle, "--yes")

        assert result.exit_code == 0
        chapters = get_store().get_project(project_id).chapters
        assert [c.order for c in chapters] == [0, 1]
        assert middle not in [c.id for c in chapters]

    def test_delete_chapter_declined(self, project_id):
        invoke("add-chapter", project_id)

        result = invoke("delete-chapter", project_id, "1", input="n\n")

        assert "Cancelled" in result.output
        assert len(get_store().get_project(project_id).chapters) == 1


class TestAssistCommands:

    @pytest.fixture
    def project_id(self):
        store = get_store()
        project = store.create_project("Novel")
        return project.id

    def test_generate_and_apply(self, project_id):
        invoke("add-chapter", project_id)
        invoke("edit-chapter", project_id, "1", "--content", "开头")

        result = invoke("generate", project_id, "1", "--template", "expand", "--apply")

        assert result.exit_code == 0
        content = get_store().get_project(project_id).chapters[0].content
        assert content.startswith("开头\n\n在这个寂静的夜晚")

    def test_generate_without_apply_leaves_chapter(self, project_id):
        invoke("add-chapter", project_id)

        result = invoke("generate", project_id, "1")

        assert result.exit_code == 0
        assert get_store().get_project(project_id).chapters[0].content == ""

    def test_generate_unknown_template(self, project_id):
        invoke("add-chapter", project_id)
        result = invoke("generate", project_id, "1", "--template", "poetry")
        assert result.exit_code == 1
        assert "Unknown template" in result.output

    def test_analyze(self, project_id):
        invoke("add-chapter", project_id)

        result = invoke("analyze", project_id, "1", "--method", "analysis")

        assert result.exit_code == 0
        assert "深度分析分析报告" in result.output


def test_version():
    result = invoke("--version")
    assert result.exit_code == 0
    assert "Zhixia v" in result.output


def test_invalid_config_reports_error(monkeypatch, temp_dir):
    monkeypatch.chdir(temp_dir)
    (temp_dir / "config.yaml").write_text("log_level: verbose\n", encoding='utf-8')

    result = invoke("projects")

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
