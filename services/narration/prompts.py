"""Prompt construction for narration requests.

Templates, role instructions, text budgets and generation parameters come from
``config/narration.yaml``; the constants below are used when a key is absent.
"""

from __future__ import annotations

from typing import Any

from shared.config import ServiceConfig
from shared.models import NarrationMode, NarrationRequest, PositionRole, Slide
from shared.utils import setup_logging, validate_text_length

logger = setup_logging("narration-prompts")

DEFAULT_FALLBACK_TEMPLATE = "スライド{slide_number}の内容を説明します。"

DEFAULT_ROLE_INSTRUCTIONS = {
    PositionRole.FIRST: "導入として簡潔に始める",
    PositionRole.MIDDLE: "内容を分かりやすく説明する",
    PositionRole.LAST: "締めくくりの言葉を含める",
}

DEFAULT_MODE_SETTINGS: dict[NarrationMode, dict[str, Any]] = {
    NarrationMode.SINGLE: {
        "text_budget": 2000,
        "temperature": 0.9,
        "max_output_tokens": 1000,
        "prompt_template": (
            "あなたはプロのプレゼンテーターです。以下のスライド内容から、"
            "自然で魅力的なナレーション原稿を日本語で作成してください。\n\n"
            "【要件】\n"
            "- 150-300文字程度\n"
            "- ビジネスカジュアルな口調\n"
            "- 敬体（です・ます調）\n"
            "- 句読点を適切に入れる\n"
            "- 専門用語は分かりやすく説明\n"
            "- 前置きや挨拶は不要（内容に直接入る）\n\n"
            "【スライド内容】\n{slide_text}\n\n"
            "【出力形式】\nナレーション原稿のみを出力してください。前置きや説明は不要です。\n"
        ),
    },
    NarrationMode.BATCH: {
        "text_budget": 1500,
        "temperature": 0.9,
        "max_output_tokens": 2000,
        "prompt_template": (
            "あなたはプロのプレゼンテーターです。以下のスライド内容から、"
            "自然で魅力的なナレーション原稿を日本語で作成してください。\n\n"
            "【スライド番号】\n{slide_number}枚目\n\n"
            "【要件】\n"
            "- 150-250文字程度\n"
            "- ビジネスカジュアルな口調\n"
            "- 敬体（です・ます調）\n"
            "- 句読点を適切に入れる\n"
            "- {role_instruction}\n\n"
            "【スライド内容】\n{slide_text}\n\n"
            "【出力形式】\nナレーション原稿のみを出力してください。前置きや説明は不要です。\n"
        ),
    },
}


def determine_position_role(index: int, total: int) -> PositionRole:
    """Role of the slide at ``index`` within a batch of ``total`` slides."""
    if index == 0:
        return PositionRole.FIRST
    if index == total - 1:
        return PositionRole.LAST
    return PositionRole.MIDDLE


class NarrationPromptBuilder:
    """Builds narration requests and prompts from the narration configuration."""

    def __init__(self, service_config: ServiceConfig):
        self.service_config = service_config

    def _mode_value(self, mode: NarrationMode, key: str) -> Any:
        return self.service_config.get_narration_value(
            f"modes.{mode.value}.{key}", DEFAULT_MODE_SETTINGS[mode][key]
        )

    def text_budget(self, mode: NarrationMode) -> int:
        return int(self._mode_value(mode, "text_budget"))

    def generation_parameters(self, mode: NarrationMode) -> dict[str, Any]:
        """Parameters handed to the narration driver for ``mode``."""
        return {
            "temperature": float(self._mode_value(mode, "temperature")),
            "max_output_tokens": int(self._mode_value(mode, "max_output_tokens")),
        }

    def build_batch_request(self, slide: Slide, position: int, total: int) -> NarrationRequest:
        return NarrationRequest(
            slide_text=validate_text_length(slide.text, self.text_budget(NarrationMode.BATCH)),
            position_role=determine_position_role(position, total),
            mode=NarrationMode.BATCH,
            slide_number=position + 1,
        )

    def build_single_request(self, text: str) -> NarrationRequest:
        return NarrationRequest(
            slide_text=validate_text_length(text, self.text_budget(NarrationMode.SINGLE)),
            position_role=PositionRole.STANDALONE,
            mode=NarrationMode.SINGLE,
        )

    def role_instruction(self, role: PositionRole) -> str:
        if role == PositionRole.STANDALONE:
            return ""
        return self.service_config.get_narration_value(
            f"role_instructions.{role.value}", DEFAULT_ROLE_INSTRUCTIONS[role]
        )

    def render_prompt(self, request: NarrationRequest) -> str:
        """Render the prompt text for a narration request."""
        template = self._mode_value(request.mode, "prompt_template")
        try:
            return template.format(
                slide_text=request.slide_text,
                slide_number=request.slide_number or 1,
                role_instruction=self.role_instruction(request.position_role),
            )
        except (KeyError, IndexError) as e:
            logger.warning(f"Invalid placeholder in {request.mode.value} prompt template: {e}")
            return DEFAULT_MODE_SETTINGS[request.mode]["prompt_template"].format(
                slide_text=request.slide_text,
                slide_number=request.slide_number or 1,
                role_instruction=self.role_instruction(request.position_role),
            )

    def fallback_text(self, slide_number: int) -> str:
        """Placeholder narration used when generation fails for a slide."""
        template = self.service_config.get_narration_value("fallback_template", DEFAULT_FALLBACK_TEMPLATE)
        return template.format(slide_number=slide_number)
