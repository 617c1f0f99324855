"""
Tests for chat summaries of analytics answers.
"""

from analytics_chat.entities import AnalyticsAnswer
from analytics_chat.services.summaries import format_value, summarize_answer, table_label


def test_format_value():
    """Test number rendering."""
    assert format_value(99441) == "99,441"
    assert format_value(2.0) == "2"
    assert format_value(120.6524) == "120.652"
    assert format_value("SP") == "SP"


def test_table_label():
    """Test table naming from SQL."""
    assert table_label("SELECT * FROM olist_order_items") == "order items"
    assert table_label("SELECT 1") is None


def test_single_metric():
    """Test the sentence for one counted value."""
    answer = AnalyticsAnswer(
        sql="SELECT COUNT(*) AS total FROM olist_orders",
        explanation="Counts orders.",
        data=[{"total": 99441}],
        columns=["total"],
        visualization_type="metric",
    )
    text = summarize_answer(answer)
    assert text.startswith("There are **99,441** orders in the dataset.")
    assert "counting rows in the orders table" in text


def test_single_row():
    """Test the sentence for one multi-column row."""
    answer = AnalyticsAnswer(
        sql="SELECT MAX(price) AS max_price, MIN(price) AS min_price FROM olist_order_items",
        explanation="",
        data=[{"max_price": 6735.0, "min_price": 0.85}],
        columns=["max_price", "min_price"],
    )
    text = summarize_answer(answer)
    assert "Here is the result: **max_price**: 6,735, **min_price**: 0.85." in text


def test_many_rows_are_sampled():
    """Test that long results list three rows and a remainder."""
    rows = [{"state": f"S{i}", "orders": i} for i in range(8)]
    answer = AnalyticsAnswer(sql="SELECT state, orders FROM t", explanation="", data=rows, columns=["state", "orders"])
    text = summarize_answer(answer)

    assert "The query returned **8** rows." in text
    assert "**state**: S2" in text
    assert "**state**: S3" not in text
    assert "- ...and 5 more rows" in text


def test_short_results_are_listed_fully():
    """Test that up to five rows are all listed."""
    rows = [{"state": f"S{i}"} for i in range(5)]
    answer = AnalyticsAnswer(sql="SELECT state FROM t", explanation="", data=rows, columns=["state"])
    text = summarize_answer(answer)
    assert "**state**: S4" in text
    assert "more rows" not in text


def test_empty_data_uses_explanation():
    """Test the no-rows fallback."""
    answer = AnalyticsAnswer(sql="", explanation="Nothing to show.")
    assert summarize_answer(answer) == "Nothing to show."
