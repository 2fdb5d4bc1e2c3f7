"""HTTP client for the TTS / voice-cloning backend."""

import logging
import os

import requests

from tts_studio.constants import (
    DEFAULT_API_URL,
    DEFAULT_API_VERSION,
    DEFAULT_SPEED,
    HEALTH_TIMEOUT_SECONDS,
    SYNTHESIS_TIMEOUT_SECONDS,
)
from tts_studio.errors import FileIOError, HTTPError, TransportError
from tts_studio.models import BuiltInVoice, SynthesisRequest
from tts_studio.textio import read_bytes

logger = logging.getLogger(__name__)


def _response_error(response: requests.Response) -> HTTPError:
    """Build an HTTPError from a non-2xx response, keeping its body if any."""
    try:
        body = response.text
    except (UnicodeDecodeError, LookupError):
        body = response.content.decode("utf-8", errors="replace")
    return HTTPError(response.status_code, response.reason or "", body.strip())


class SynthesisClient:
    """Synthesis client over the backend's /tts, /clone and /clone_eq endpoints.

    Calls block until the backend answers; by default there is no timeout
    because the first request after a restart may wait minutes for model
    loading. Nothing is retried here.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float | None = SYNTHESIS_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, endpoint: str, **kwargs) -> bytes:
        url = f"{self.base_url}{endpoint}"
        logger.debug("POST %s", url)
        try:
            response = self.session.post(url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error("Request to %s failed: %s", url, e)
            raise TransportError(str(e)) from e

        if not response.ok:
            error = _response_error(response)
            logger.error("Request to %s failed: %s", url, error)
            raise error
        return response.content

    def synthesize_builtin(
        self,
        text: str,
        voice_name: str,
        speed: float = DEFAULT_SPEED,
        version: str = DEFAULT_API_VERSION,
    ) -> bytes:
        """Synthesize text with a server-side preset voice. Returns audio bytes."""
        payload = {"text": text, "role": voice_name, "speed": speed, "version": version}
        return self._post("/tts", json=payload)

    def synthesize_clone(
        self,
        text: str,
        reference_audio: str,
        reference_text: str | None = None,
        speed: float = DEFAULT_SPEED,
        version: str = DEFAULT_API_VERSION,
    ) -> bytes:
        """Synthesize text in the voice of a reference audio sample.

        A non-blank reference_text selects same-language cloning (/clone_eq);
        without one the backend clones across languages (/clone). Both model
        versions are served by the same endpoints, so version is only logged.
        """
        try:
            audio = read_bytes(reference_audio)
        except FileIOError:
            logger.error("Reference audio not readable: %s", reference_audio)
            raise

        data = {"text": text, "speed": str(speed)}
        if reference_text and reference_text.strip():
            data["reference_text"] = reference_text
            endpoint = "/clone_eq"
        else:
            endpoint = "/clone"

        files = {
            "reference_audio": (os.path.basename(reference_audio), audio, "audio/wav"),
        }
        logger.debug("Cloning via %s (version %s)", endpoint, version)
        return self._post(endpoint, data=data, files=files)

    def synthesize(self, request: SynthesisRequest) -> bytes:
        """Dispatch a request on its voice type."""
        voice = request.voice
        if isinstance(voice, BuiltInVoice):
            return self.synthesize_builtin(request.text, voice.name, request.speed, request.api_version)
        return self.synthesize_clone(
            request.text,
            voice.file_path,
            voice.reference_text,
            request.speed,
            request.api_version,
        )

    def check_health(self, timeout: float = HEALTH_TIMEOUT_SECONDS) -> dict | str:
        """Probe GET /health. Returns the decoded JSON (or raw text) payload."""
        url = f"{self.base_url}/health"
        try:
            response = self.session.get(url, timeout=timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(str(e)) from e

        if not response.ok:
            raise _response_error(response)
        try:
            return response.json()
        except ValueError:
            return response.text
