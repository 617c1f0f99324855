"""
Tests for SQL generation and model-response parsing.
"""

import asyncio

import pytest

from analytics_chat.entities import ConversationalReply, ConversationTurn, GeneratedQuery
from analytics_chat.errors import GenerationError, SQLValidationError
from analytics_chat.services import SQLGenerator
from analytics_chat.services.sql_generator import (
    is_general_question,
    is_greeting,
    parse_model_response,
)

from conftest import FakeTextGenerator, model_json


def generate(generator, question, history=None):
    return asyncio.run(generator.generate(question, history))


@pytest.mark.parametrize("question", ["hi", "Hello", "  good morning  ", "HOWDY"])
def test_greetings(question):
    """Test whole-string greeting detection."""
    assert is_greeting(question)


def test_greeting_inside_sentence_is_not_greeting():
    """Test that greetings must be the whole question."""
    assert not is_greeting("hi, how many orders are there?")


def test_general_question_detection():
    """Test general questions against data questions."""
    assert is_general_question("What can you do?")
    assert not is_general_question("How many orders are there?")
    assert not is_general_question("What is the revenue by state?")


def test_greeting_makes_no_model_call():
    """Test that greetings are answered locally."""
    text_generator = FakeTextGenerator()
    result = generate(SQLGenerator(text_generator, history_limit=10), "hello")

    assert isinstance(result, ConversationalReply)
    assert result.explanation
    assert text_generator.call_count == 0


def test_general_question_makes_no_model_call():
    """Test that questions about the tool are answered locally."""
    text_generator = FakeTextGenerator()
    result = generate(SQLGenerator(text_generator, history_limit=10), "Can you help me?")

    assert isinstance(result, ConversationalReply)
    assert text_generator.call_count == 0


def test_generates_validated_query():
    """Test the happy path, including trailing semicolon removal."""
    text_generator = FakeTextGenerator([model_json("SELECT COUNT(*) AS total FROM olist_orders;")])
    result = generate(SQLGenerator(text_generator, history_limit=10), "Total orders")

    assert isinstance(result, GeneratedQuery)
    assert result.sql == "SELECT COUNT(*) AS total FROM olist_orders"
    assert result.visualization_type == "metric"
    assert text_generator.call_count == 1
    assert "Total orders" in text_generator.prompts[0]


def test_fenced_json_is_parsed():
    """Test that Markdown code fences are tolerated."""
    fenced = "```json\n" + model_json("SELECT 1") + "\n```"
    result = generate(SQLGenerator(FakeTextGenerator([fenced]), history_limit=10), "Show orders")
    assert isinstance(result, GeneratedQuery)
    assert result.sql == "SELECT 1"


def test_json_embedded_in_prose_is_parsed():
    """Test recovery of the first JSON object inside text."""
    parsed = parse_model_response('Sure! {"sql": "SELECT 1", "explanation": "x"} Hope it helps.')
    assert parsed["sql"] == "SELECT 1"


def test_unparsable_response_raises():
    """Test that free text without JSON is a generation error."""
    text_generator = FakeTextGenerator(["I cannot answer that."])
    with pytest.raises(GenerationError) as exc_info:
        generate(SQLGenerator(text_generator, history_limit=10), "Show orders")
    assert "I cannot answer that." in str(exc_info.value)


def test_empty_sql_is_conversational():
    """Test that an empty sql field becomes a conversational reply."""
    text_generator = FakeTextGenerator([model_json("", explanation="I can only answer data questions.")])
    result = generate(SQLGenerator(text_generator, history_limit=10), "Show me a poem about orders")

    assert isinstance(result, ConversationalReply)
    assert result.explanation == "I can only answer data questions."


def test_unsafe_sql_raises_validation_error():
    """Test that unsafe generated SQL never becomes a query."""
    text_generator = FakeTextGenerator([model_json("SELECT * FROM olist_orders; DROP TABLE olist_orders")])
    with pytest.raises(SQLValidationError) as exc_info:
        generate(SQLGenerator(text_generator, history_limit=10), "Show orders")
    assert "DROP TABLE" in exc_info.value.sql


def test_missing_visualization_defaults_to_table():
    """Test the visualization default."""
    text_generator = FakeTextGenerator([model_json("SELECT 1", visualization=None)])
    result = generate(SQLGenerator(text_generator, history_limit=10), "Show orders")
    assert result.visualization_type == "table"


def test_unknown_visualization_falls_back_to_table():
    """Test that unsupported chart names are replaced."""
    text_generator = FakeTextGenerator([model_json("SELECT 1", visualization="radar")])
    result = generate(SQLGenerator(text_generator, history_limit=10), "Show orders")
    assert result.visualization_type == "table"


def test_only_recent_history_reaches_prompt():
    """Test that history is trimmed to the configured number of turns."""
    history = [ConversationTurn(role="user", content=f"turn-{i}") for i in range(5)]
    text_generator = FakeTextGenerator([model_json("SELECT 1")])
    generate(SQLGenerator(text_generator, history_limit=2), "Show orders", history)

    prompt = text_generator.prompts[0]
    assert "User: turn-4" in prompt
    assert "User: turn-3" in prompt
    assert "turn-2" not in prompt


def test_model_failure_propagates():
    """Test that provider errors are not retried or hidden."""
    text_generator = FakeTextGenerator(error=GenerationError("Gemini API error: quota"))
    with pytest.raises(GenerationError):
        generate(SQLGenerator(text_generator, history_limit=10), "Show orders")
    assert text_generator.call_count == 1
