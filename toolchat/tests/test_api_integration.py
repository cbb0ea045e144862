"""
Live API integration tests: run real turns through ChatService.

Run only when TEST_APIS=True in the environment and the corresponding API key is set.
"""

from unittest import TestCase

from assistant.tools import ProductDetailsTool
from toolchat.service.chat_service import ChatService
from toolchat.service.config import ChatSettings
from toolchat.tests.utils import require_test_apis


@require_test_apis()
class ProviderLiveAPITests(TestCase):
    """One plain turn and one tool turn per provider. Requires TEST_APIS=True."""

    def _service(self, model: str) -> ChatService:
        return ChatService.from_settings(ChatSettings(model=model))

    def _assert_plain_turn(self, model: str) -> None:
        service = self._service(model)
        session = service.start_session([])
        result = service.run_turn(session, "Reply with exactly the word OK and nothing else.")
        self.assertIn("OK", result.text.upper())

    def _assert_tool_turn(self, model: str) -> None:
        service = self._service(model)
        session = service.start_session([ProductDetailsTool()])
        result = service.run_turn(session, "What's the price of prod-123?")
        self.assertEqual([tc.name for tc in result.tool_calls], ["getProductDetails"])
        self.assertIn("1500", result.text.replace(",", ""))

    def test_gemini(self):
        self._assert_plain_turn("gemini-2.0-flash")
        self._assert_tool_turn("gemini-2.0-flash")

    def test_openai(self):
        self._assert_plain_turn("gpt-4o-mini")
        self._assert_tool_turn("gpt-4o-mini")

    def test_anthropic(self):
        self._assert_plain_turn("claude-3-5-haiku-latest")
        self._assert_tool_turn("claude-3-5-haiku-latest")
