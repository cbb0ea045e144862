"""Tests for the shared LangChain conversion utilities."""

from unittest import TestCase

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage

from toolchat.core.langchain_utils import (
    content_to_text,
    parse_tool_calls_from_ai_message,
    to_langchain_messages,
)
from toolchat.types.messages import Message, ToolCall


class ToLangchainMessagesTests(TestCase):
    """Test role mapping and edge cases for to_langchain_messages."""

    def test_system_and_user_roles(self):
        result = to_langchain_messages([
            Message(role="system", content="Be helpful"),
            Message(role="user", content="Hi"),
        ])
        self.assertIsInstance(result[0], SystemMessage)
        self.assertIsInstance(result[1], HumanMessage)
        self.assertEqual(result[1].content, "Hi")

    def test_assistant_with_tool_calls(self):
        msg = Message(
            role="assistant",
            content="",
            tool_calls=[ToolCall(id="id1", name="getProductDetails", arguments={"productId": "prod-123"})],
        )
        result = to_langchain_messages([msg])
        self.assertIsInstance(result[0], AIMessage)
        self.assertEqual(result[0].tool_calls[0]["name"], "getProductDetails")
        self.assertEqual(result[0].tool_calls[0]["args"], {"productId": "prod-123"})
        self.assertEqual(result[0].tool_calls[0]["id"], "id1")

    def test_tool_result_maps_to_tool_message_with_name(self):
        msg = Message(role="tool", content='{"price": 1500.0}', tool_call_id="id1", name="getProductDetails")
        result = to_langchain_messages([msg])
        self.assertIsInstance(result[0], ToolMessage)
        self.assertEqual(result[0].tool_call_id, "id1")
        self.assertEqual(result[0].name, "getProductDetails")

    def test_tool_role_without_id_maps_to_human_message(self):
        result = to_langchain_messages([Message(role="tool", content="result")])
        self.assertIsInstance(result[0], HumanMessage)


class ParseToolCallsTests(TestCase):
    def test_no_tool_calls_returns_none(self):
        self.assertIsNone(parse_tool_calls_from_ai_message(AIMessage(content="hello")))

    def test_parses_dict_tool_calls(self):
        ai = AIMessage(
            content="",
            tool_calls=[{"id": "c1", "name": "searchMemory", "args": {"query": "BlueFox"}}],
        )
        calls = parse_tool_calls_from_ai_message(ai)
        self.assertEqual(calls, [ToolCall(id="c1", name="searchMemory", arguments={"query": "BlueFox"})])

    def test_missing_ids_get_positional_ids(self):
        ai = AIMessage(
            content="",
            tool_calls=[
                {"id": None, "name": "a", "args": {}},
                {"id": None, "name": "b", "args": {}},
            ],
        )
        calls = parse_tool_calls_from_ai_message(ai)
        self.assertEqual([c.id for c in calls], ["call_0", "call_1"])


class ContentToTextTests(TestCase):
    def test_string_and_none(self):
        self.assertEqual(content_to_text("hi"), "hi")
        self.assertEqual(content_to_text(None), "")

    def test_list_of_parts(self):
        parts = ["Hello", {"type": "text", "text": " world"}, {"type": "image_url", "image_url": "x"}]
        self.assertEqual(content_to_text(parts), "Hello world")
