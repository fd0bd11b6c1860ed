import pytest

from docanalytics.extraction.titles import (
    DEFAULT_TITLE,
    clean_title,
    filename_title,
    first_line,
    flow_text_title,
    heading_title,
    metadata_title,
    placeholder_content,
    printable_text,
)


class TestFilenameTitle:
    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("quarterly_report-2024.pdf", "Quarterly Report 2024"),
            ("API_GUIDE.docx", "Api Guide"),
            ("dir/sub/meeting-notes.txt", "Meeting Notes"),
            ("archive.tar.gz", "Archive.tar"),
            ("no_extension", "No Extension"),
        ],
    )
    def test_transforms(self, filename: str, expected: str) -> None:
        assert filename_title(filename) == expected

    def test_never_empty(self) -> None:
        assert filename_title("") == DEFAULT_TITLE
        assert filename_title(".pdf") == DEFAULT_TITLE
        assert filename_title("___.txt") == DEFAULT_TITLE


class TestMetadataTitle:
    def test_collapses_whitespace(self) -> None:
        assert metadata_title("  Annual\n Report ") == "Annual Report"

    @pytest.mark.parametrize("raw", [None, "", "   ", "untitled", "Untitled Document"])
    def test_blank_and_placeholder_titles_are_ignored(self, raw: str | None) -> None:
        assert metadata_title(raw) == ""


class TestFlowTextTitle:
    def test_markdown_header(self) -> None:
        text = "intro line\n\n## Deployment Guide\nbody"
        assert flow_text_title(text) == "Deployment Guide"

    def test_markdown_header_must_be_three_chars(self) -> None:
        assert flow_text_title("# AB\nProject Roadmap") == "Project Roadmap"

    def test_first_qualifying_line(self) -> None:
        text = "Page 1\nThis is a sentence.\nRelease Notes\nmore"
        assert flow_text_title(text) == "Release Notes"

    def test_lines_past_the_fifth_are_not_considered(self) -> None:
        text = "\n".join(["One.", "Two.", "Three.", "Four.", "Five.", "Late Title"])
        assert flow_text_title(text) == ""

    def test_rejects_too_long_lines(self) -> None:
        assert flow_text_title("x" * 121) == ""

    @pytest.mark.parametrize(
        "line",
        ["Table of Contents", "Cover Page", "Title Page", "Abstract", "12345", "Page 3 of 9"],
    )
    def test_exclusions(self, line: str) -> None:
        assert flow_text_title(line) == ""


class TestOtherHelpers:
    def test_heading_title_skips_boilerplate(self) -> None:
        assert heading_title(["Table of Contents", " Scope  of Work "]) == "Scope of Work"

    def test_first_line(self) -> None:
        assert first_line("\n\n  hello   world \nsecond") == "hello world"
        assert first_line("") == ""

    def test_printable_text_drops_binary_noise(self) -> None:
        assert printable_text(b"\x00\x01Readable\xff text") == "Readable text"

    def test_placeholder_content_mentions_title(self) -> None:
        assert "Budget" in placeholder_content("Budget")

    def test_clean_title(self) -> None:
        assert clean_title(None) == ""
