from docanalytics.search.tokenizer import tokenize_query


class TestTokenizeQuery:
    def test_lowercases_and_splits(self) -> None:
        assert tokenize_query("Cloud  STORAGE").tokens == ("cloud", "storage")

    def test_drops_short_tokens(self) -> None:
        assert tokenize_query("an ai of cloud").tokens == ("cloud",)

    def test_removes_repeats_keeping_first_position(self) -> None:
        assert tokenize_query("cloud data Cloud").tokens == ("cloud", "data")

    def test_short_query_is_empty(self) -> None:
        query = tokenize_query("ab")
        assert query.is_empty
        assert query.raw == "ab"

    def test_blank_query_is_empty(self) -> None:
        assert tokenize_query("   ").is_empty
