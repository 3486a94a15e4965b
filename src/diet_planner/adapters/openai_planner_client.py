"""OpenAI Responses API client for plan generation."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from diet_planner.services.planner import PlannerClient, parse_json_text


@dataclass
class OpenAIPlannerClient(PlannerClient):
    """Planner client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIPlannerClient":
        """Create an OpenAI planner client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema_name: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": prompt}],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        return parse_json_text(response.output_text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
