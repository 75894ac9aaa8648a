"""
Unit tests for reading question catalog tables.

Run: pytest tests/test_catalog_parser.py -v
"""

import pytest

from examdrill.catalog_parser import QuestionCatalogParser
from examdrill.schemas import QuestionCreate

CSV = """Text,Category,Difficulty,Options,Correct_Answers,Explanation,Is_Public
First-line treatment for panic disorder?,Adult Psychiatry,Easy,A: Alprazolam | B: Sertraline,B,SSRIs are first line,true
Initial step for suspected ADHD?,Child Psychiatry,,A: Stimulants | B: Evaluation,"A, B",,false
,Adult Psychiatry,medium,,,,
"""


@pytest.fixture
def catalog_csv(tmp_path):
    path = tmp_path / "questions.csv"
    path.write_text(CSV, encoding="utf-8")
    return path


class TestCsvCatalog:

    def test_parses_rows(self, catalog_csv):
        questions = QuestionCatalogParser.auto_parse(str(catalog_csv))

        assert len(questions) == 2
        first = questions[0]
        assert first["text"] == "First-line treatment for panic disorder?"
        assert first["difficulty"] == "easy"
        assert first["options"] == [
            {"label": "A", "text": "Alprazolam"},
            {"label": "B", "text": "Sertraline"},
        ]
        assert first["correct_answers"] == ["B"]
        assert first["is_public"] is True

    def test_defaults_for_empty_cells(self, catalog_csv):
        second = QuestionCatalogParser.auto_parse(str(catalog_csv))[1]

        assert second["difficulty"] == "medium"
        assert second["explanation"] is None
        assert second["correct_answers"] == ["A", "B"]
        assert second["is_public"] is False

    def test_rows_validate_as_questions(self, catalog_csv):
        for item in QuestionCatalogParser.auto_parse(str(catalog_csv)):
            assert QuestionCreate(**item).category

    def test_json_options(self, tmp_path):
        path = tmp_path / "json.csv"
        path.write_text(
            'text,category,options\n'
            'Q?,Neurology,"[{""label"": ""A"", ""text"": ""Yes""}]"\n',
            encoding="utf-8",
        )

        [question] = QuestionCatalogParser.auto_parse(str(path))

        assert question["options"] == [{"label": "A", "text": "Yes"}]

    def test_malformed_option(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("text,category,options\nQ?,Neurology,just text\n", encoding="utf-8")

        with pytest.raises(ValueError):
            QuestionCatalogParser.auto_parse(str(path))

    def test_unsupported_extension(self, tmp_path):
        with pytest.raises(ValueError):
            QuestionCatalogParser.auto_parse(str(tmp_path / "questions.pdf"))
