from quran_search.tokenizer import tokenize


def test_splits_on_whitespace():
    assert tokenize("bread and  water") == ["bread", "and", "water"]


def test_splits_on_punctuation_runs():
    assert tokenize("a.b,c،d؛e؟f!g-h/i") == list("abcdefghi")
    assert tokenize("one ,.- two") == ["one", "two"]


def test_no_empty_tokens_at_edges():
    assert tokenize("  ...hello!  ") == ["hello"]


def test_empty_and_separator_only():
    assert tokenize("") == []
    assert tokenize(" - / ") == []


def test_keeps_order_and_duplicates():
    assert tokenize("b a b") == ["b", "a", "b"]
