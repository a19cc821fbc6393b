from typing import Optional

import requests

from stock_api.domain.errors import ConfigError, UpstreamError, UpstreamFormatError


class GeminiClient:
    """Minimal client for the Gemini generateContent REST endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = 'gemini-1.5-flash-latest',
        base_url: str = 'https://generativelanguage.googleapis.com/v1beta',
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ConfigError('GEMINI_API_KEY not configured')
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def generate(self, prompt: str, temperature: float = 0.3, max_output_tokens: int = 1000) -> str:
        """Send a single-turn prompt and return the text of the first candidate."""
        url = f'{self.base_url}/models/{self.model}:generateContent'
        body = {
            'contents': [{'parts': [{'text': prompt}]}],
            'generationConfig': {
                'temperature': temperature,
                'maxOutputTokens': max_output_tokens,
            },
        }

        try:
            response = self.session.post(url, params={'key': self.api_key}, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamError(f'Gemini API request failed: {e}') from e

        if not response.ok:
            raise UpstreamError(f'Gemini API error: {response.status_code}')

        try:
            data = response.json()
            return data['candidates'][0]['content']['parts'][0]['text']
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamFormatError('Invalid response format from Gemini') from e
