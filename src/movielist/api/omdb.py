"""OMDb title lookup client.

Looks up a single title against the OMDb API and turns the response into
either a MovieRecord or a typed MovieLookupError. One attempt per title, no
retry; callers that want resilience re-invoke.
"""

import json

import httpx
from loguru import logger

from ..config import MovieListConfig
from ..errors import MalformedResponseError, NotFoundError, TransportError
from ..models import (
    NOT_FOUND_SENTINEL,
    ClassifiedResponse,
    MovieRecord,
    ResponseKind,
)

log = logger.bind(stage="omdb")


def classify_response(body: bytes) -> ClassifiedResponse:
    """Decode a provider body once and tag what it is.

    Looks only at the discriminating fields (Response, Error) before handing
    the payload on for record decoding.
    """
    if not body.strip():
        return ClassifiedResponse(ResponseKind.EMPTY)

    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return ClassifiedResponse(
            ResponseKind.MALFORMED, reason=f"body is not JSON: {e}"
        )

    if not isinstance(data, dict):
        return ClassifiedResponse(
            ResponseKind.MALFORMED,
            reason=f"expected JSON object, got {type(data).__name__}",
        )

    error = data.get("Error")
    if error == NOT_FOUND_SENTINEL:
        return ClassifiedResponse(ResponseKind.NOT_FOUND, reason=error)

    if str(data.get("Response", "")).lower() == "false":
        return ClassifiedResponse(
            ResponseKind.MALFORMED,
            reason=f"provider error: {error or 'no error message'}",
        )

    return ClassifiedResponse(ResponseKind.RECORD, payload=data)


class OmdbClient:
    """Blocking OMDb client shared by all lookups of a batch.

    httpx.Client is thread-safe, so one instance serves every worker thread.
    """

    def __init__(
        self,
        config: MovieListConfig,
        http: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = config.omdb_base_url
        self._api_key = config.api_key
        self._owns_http = http is None
        self._http = http or httpx.Client(
            timeout=config.request_timeout,
            follow_redirects=True,
            transport=transport,
        )

    def __enter__(self) -> "OmdbClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def fetch(self, title: str) -> MovieRecord:
        """Look up one title.

        Returns a MovieRecord, or a title-only record when the provider sends
        an empty body. Raises TransportError, NotFoundError or
        MalformedResponseError.
        """
        log.debug(f"OMDb lookup: title={title!r}")

        try:
            resp = self._http.get(
                self.base_url,
                params={"apikey": self._api_key, "t": title},
            )
            body = resp.content
        except httpx.HTTPError as e:
            log.warning(f"Unable to retrieve data for {title!r}: {e!r}")
            raise TransportError(title, f"{type(e).__name__}: {e}") from e

        if resp.status_code >= 500:
            log.warning(f"OMDb returned {resp.status_code} for {title!r}")
            raise TransportError(title, f"provider returned HTTP {resp.status_code}")

        result = classify_response(body)

        if result.kind == ResponseKind.EMPTY:
            # Lenient: an empty body is "no extra info", not a failure
            log.info(f"No additional movie info found for title: {title!r}")
            return MovieRecord(title=title)

        if result.kind == ResponseKind.NOT_FOUND:
            log.warning(f"{title!r} was not found in OMDb")
            raise NotFoundError(title, f"{title} was not found in OMDb")

        if result.kind == ResponseKind.MALFORMED:
            log.warning(
                f"Unable to decode OMDb response for {title!r} "
                f"(HTTP {resp.status_code}): {result.reason}"
            )
            raise MalformedResponseError(title, result.reason)

        try:
            record = MovieRecord.from_provider(result.payload)
        except TypeError as e:
            log.warning(f"Unable to decode OMDb record for {title!r}: {e}")
            raise MalformedResponseError(title, str(e)) from e

        if not record.is_populated:
            log.debug(f"OMDb record for {title!r} is missing imdbID")
        return record
