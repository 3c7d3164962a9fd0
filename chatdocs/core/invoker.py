# chatdocs/core/invoker.py
"""
Prompt Invoker：把一段提示词发送给 Gemini，返回模型的文本响应。

每次调用都建立一个新的对话会话、只发送一条消息、只接收一次响应；
不重试、不流式输出。
"""

from dataclasses import dataclass
from typing import Any, Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from google.generativeai.types import BlockedPromptException, StopCandidateException

from .exceptions import ConfigError, GenerationError, InputError
from .models import PromptConfig


@dataclass(frozen=True)
class InvocationResult:
    text: str
    response: Any


class GeminiInvoker:
    def __init__(self, api_key: Optional[str]):
        """
        Args:
            api_key (str): Gemini API key. 由调用方显式传入，CLI 从环境变量读取。
        """
        if not api_key:
            raise ConfigError("No API key provided for the generative API.")
        self.api_key = api_key
        genai.configure(api_key=api_key)

    def _create_model(self, config: PromptConfig):
        return genai.GenerativeModel(
            model_name=config.model,
            generation_config=config.generation_config,
            system_instruction=config.system_instruction,
        )

    def invoke(self, config: PromptConfig, prompt: str) -> InvocationResult:
        """
        发送 prompt，返回响应文本与完整响应对象。

        Raises:
            InputError: prompt 为空或只包含空白。
            GenerationError: API 调用失败或响应中没有文本。
        """
        prompt = (prompt or "").strip()
        if not prompt:
            raise InputError("No input received for the prompt.")

        model = self._create_model(config)
        chat_session = model.start_chat(history=[])
        try:
            response = chat_session.send_message(prompt)
            text = response.text
        except google_exceptions.GoogleAPIError as e:
            raise GenerationError(f"{config.model} request failed: {e}") from e
        except BlockedPromptException as e:
            raise GenerationError(f"{config.model} blocked the prompt: {e}") from e
        except StopCandidateException as e:
            raise GenerationError(f"{config.model} stopped generating: {e}") from e
        except ValueError as e:
            # response.text 在响应被拦截或没有候选结果时抛出 ValueError
            raise GenerationError(f"{config.model} returned no text: {e}") from e

        return InvocationResult(text=text, response=response)

    def __call__(self, config: PromptConfig, prompt: str) -> str:
        return self.invoke(config, prompt).text
