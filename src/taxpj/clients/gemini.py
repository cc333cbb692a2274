"""Google Gemini client for structured document extraction.

Uses the google-genai SDK (v1.0+).
"""

from typing import Any, Optional

import structlog
from google import genai
from google.genai import types

from taxpj.domain.errors import UpstreamError

logger = structlog.get_logger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


def convert_json_schema_to_gemini(schema: dict[str, Any]) -> dict[str, Any]:
    """Convert JSON Schema to Gemini's schema format.

    Gemini uses a subset of OpenAPI schema format.
    """
    gemini_schema: dict[str, Any] = {}

    if "type" in schema:
        type_map = {
            "string": "STRING",
            "integer": "INTEGER",
            "number": "NUMBER",
            "boolean": "BOOLEAN",
            "array": "ARRAY",
            "object": "OBJECT",
        }
        gemini_schema["type"] = type_map.get(schema["type"], "STRING")

    if "description" in schema:
        gemini_schema["description"] = schema["description"]

    if "enum" in schema:
        gemini_schema["enum"] = schema["enum"]

    if "properties" in schema:
        gemini_schema["properties"] = {
            k: convert_json_schema_to_gemini(v) for k, v in schema["properties"].items()
        }

    if "required" in schema:
        gemini_schema["required"] = schema["required"]

    if "items" in schema:
        gemini_schema["items"] = convert_json_schema_to_gemini(schema["items"])

    return gemini_schema


class GeminiClient:
    """Client sending one document and a prompt to Gemini, expecting JSON back."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ):
        self._model_name = model or DEFAULT_MODEL
        self._temperature = temperature
        self._client = genai.Client(api_key=api_key)

        self._logger = logger.bind(client="gemini", model=self._model_name)

    def generate_json(
        self,
        prompt: str,
        document: bytes,
        mime_type: str,
        system_instruction: str,
        response_schema: dict[str, Any],
    ) -> str:
        """Ask the model to read a document and answer with JSON.

        Args:
            prompt: User prompt accompanying the document.
            document: Raw document bytes.
            mime_type: MIME type of the document.
            system_instruction: System prompt defining the extraction rules.
            response_schema: JSON Schema the answer must follow.

        Returns:
            Response text (JSON), possibly empty.

        Raises:
            UpstreamError: If the API call fails.
        """
        self._logger.debug(
            "generating_response", mime_type=mime_type, document_size=len(document)
        )

        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=self._temperature,
            response_mime_type="application/json",
            response_schema=types.Schema.model_validate(
                convert_json_schema_to_gemini(response_schema)
            ),
        )
        contents = [
            types.Content(
                role="user",
                parts=[
                    types.Part(text=prompt),
                    types.Part(inline_data=types.Blob(data=document, mime_type=mime_type)),
                ],
            )
        ]

        try:
            response = self._client.models.generate_content(
                model=self._model_name,
                contents=contents,
                config=config,
            )
        except Exception as e:
            self._logger.error("api_error", error=str(e))
            raise UpstreamError(str(e)) from e

        usage = getattr(response, "usage_metadata", None)
        self._logger.info(
            "response_generated",
            input_tokens=getattr(usage, "prompt_token_count", 0) or 0,
            output_tokens=getattr(usage, "candidates_token_count", 0) or 0,
        )

        return response.text or ""
