# shared/llm/structured.py
"""
Structured generation on top of chat completions.

A generation sends one prompt together with the JSON schema of the expected
output, lets the model call the declared tools as many times as it needs
(bounded by MAX_TOOL_ROUNDS), and validates the final answer against the
output type. Anything else ends in a GenerationFailure.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Type

from pydantic import BaseModel, TypeAdapter, ValidationError

from wayfinder.shared.config.settings import settings
from wayfinder.shared.errors import GenerationFailure
from wayfinder.shared.llm.openai_client import chat_completion

log = logging.getLogger("llm")

CompleteFn = Callable[..., Awaitable[Dict[str, Any]]]

DEFAULT_SYSTEM_PROMPT = (
    "You are a travel planning assistant. "
    "Always answer with a single JSON value that matches the requested schema."
)

_RE_FENCE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL)


@dataclass(frozen=True)
class Tool:
    """A named capability the model may call mid-generation. `func` always returns a string."""

    name: str
    description: str
    input_model: Type[BaseModel]
    func: Callable[[Any], Awaitable[str]]

    def spec(self) -> Dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_model.model_json_schema(),
            },
        }

    async def invoke(self, raw_arguments: Any) -> str:
        try:
            if isinstance(raw_arguments, str):
                args = self.input_model.model_validate_json(raw_arguments or "{}")
            else:
                args = self.input_model.model_validate(raw_arguments or {})
        except ValidationError as e:
            log.warning(f"tool {self.name}: invalid arguments {raw_arguments!r}")
            return f"Invalid arguments for {self.name}: {e.errors(include_url=False)}"
        try:
            return await self.func(args)
        except GenerationFailure:
            raise
        except Exception as e:
            log.warning(f"tool {self.name} failed: {e}")
            raise GenerationFailure(f"The {self.name} tool failed: {e}", cause=e) from e


def strip_code_fences(text: str) -> str:
    m = _RE_FENCE.match(text or "")
    return m.group(1) if m else (text or "").strip()


class StructuredGenerationClient:
    def __init__(
        self,
        complete: Optional[CompleteFn] = None,
        *,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tool_rounds: Optional[int] = None,
    ) -> None:
        self._complete = complete or chat_completion
        self._model = model
        self._temperature = temperature
        self._max_tool_rounds = max_tool_rounds if max_tool_rounds is not None else settings.MAX_TOOL_ROUNDS

    def _user_message(self, prompt: str, adapter: TypeAdapter) -> str:
        schema = json.dumps(adapter.json_schema(by_alias=True), ensure_ascii=False)
        return (
            f"{prompt.strip()}\n\n"
            f"OUTPUT FORMAT\n"
            f"Return ONLY a JSON object (no Markdown, no extra text) that validates against this JSON schema:\n"
            f"{schema}"
        )

    async def _call_model(self, name: str, messages: List[Dict[str, Any]], tool_specs: List[Dict[str, Any]]) -> Dict[str, Any]:
        try:
            return await self._complete(
                messages,
                tools=tool_specs or None,
                response_format={"type": "json_object"},
                model=self._model,
                temperature=self._temperature,
            )
        except Exception as e:
            log.warning(f"[{name}] model call failed: {e}")
            raise GenerationFailure(f"The AI model call failed: {e}", cause=e) from e

    async def _run_tool_calls(self, name: str, tool_calls: Sequence[Dict[str, Any]], tools: Dict[str, Tool]) -> List[Dict[str, Any]]:
        out: List[Dict[str, Any]] = []
        for call in tool_calls:
            fn = call.get("function") or {}
            tool_name = fn.get("name") or ""
            tool = tools.get(tool_name)
            if tool is None:
                result = f"Unknown tool: {tool_name}"
            else:
                log.info(f"[{name}] tool call {tool_name}({fn.get('arguments')})")
                result = await tool.invoke(fn.get("arguments"))
            out.append({"role": "tool", "tool_call_id": call.get("id", ""), "content": result})
        return out

    async def generate(
        self,
        name: str,
        prompt: str,
        output_type: Any,
        *,
        tools: Sequence[Tool] = (),
        system: Optional[str] = None,
    ) -> Any:
        """
        Run one generation named `name` and return a value of `output_type`.
        Raises GenerationFailure on model errors, empty output or schema mismatch.
        """
        adapter = TypeAdapter(output_type)
        tool_map = {t.name: t for t in tools}
        tool_specs = [t.spec() for t in tools]
        messages: List[Dict[str, Any]] = [
            {"role": "system", "content": (system or DEFAULT_SYSTEM_PROMPT).strip()},
            {"role": "user", "content": self._user_message(prompt, adapter)},
        ]

        for _ in range(self._max_tool_rounds + 1):
            reply = await self._call_model(name, messages, tool_specs)
            tool_calls = reply.get("tool_calls") or []
            if tool_calls:
                messages.append({
                    "role": "assistant",
                    "content": reply.get("content"),
                    "tool_calls": tool_calls,
                })
                messages.extend(await self._run_tool_calls(name, tool_calls, tool_map))
                continue

            content = strip_code_fences(reply.get("content") or "")
            if not content:
                raise GenerationFailure("The AI model did not return a valid output.")
            try:
                return adapter.validate_json(content)
            except ValidationError as e:
                log.warning(f"[{name}] output failed schema validation: {e.error_count()} error(s)")
                raise GenerationFailure(f"The AI model returned output that does not match the expected schema: {e}", cause=e) from e

        raise GenerationFailure(f"The AI model exceeded {self._max_tool_rounds} tool-call rounds without answering.")
