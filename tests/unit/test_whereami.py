"""Tests for IP geolocation (``whereami``)."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest

from geoq.commands.whereami import locate
from geoq.core.exceptions import WhereamiError

URL = "https://ipinfo.example/json"


def _mock_client(
    mock_cls: MagicMock,
    payload: object = None,
    error: Exception | None = None,
) -> MagicMock:
    client = MagicMock()
    mock_cls.return_value.__enter__.return_value = client
    response = MagicMock()
    if error is not None:
        client.get.side_effect = error
    response.json.return_value = payload
    client.get.return_value = response
    return client


class TestLocate:
    """Location lookup."""

    @patch("geoq.commands.whereami.httpx.Client")
    def test_returns_lat_lon(self, mock_cls: MagicMock) -> None:
        client = _mock_client(mock_cls, {"ip": "1.2.3.4", "loc": "45.5,-122.6"})
        assert locate(URL, timeout_s=3.0) == "45.5,-122.6"
        client.get.assert_called_once_with(URL)
        mock_cls.assert_called_once_with(timeout=3.0, follow_redirects=True)

    @patch("geoq.commands.whereami.httpx.Client")
    def test_http_error(self, mock_cls: MagicMock) -> None:
        _mock_client(mock_cls, error=httpx.ConnectError("unreachable"))
        with pytest.raises(WhereamiError, match="failed"):
            locate(URL, timeout_s=3.0)

    @patch("geoq.commands.whereami.httpx.Client")
    def test_invalid_json(self, mock_cls: MagicMock) -> None:
        client = _mock_client(mock_cls)
        client.get.return_value.json.side_effect = ValueError("no json")
        with pytest.raises(WhereamiError, match="invalid JSON"):
            locate(URL, timeout_s=3.0)

    @pytest.mark.parametrize("payload", [{}, {"loc": 5}, ["45,-122"]])
    @patch("geoq.commands.whereami.httpx.Client")
    def test_missing_loc(self, mock_cls: MagicMock, payload: object) -> None:
        _mock_client(mock_cls, payload)
        with pytest.raises(WhereamiError, match="no 'loc'"):
            locate(URL, timeout_s=3.0)

    @pytest.mark.parametrize("loc", ["somewhere", "95,0"])
    @patch("geoq.commands.whereami.httpx.Client")
    def test_unusable_loc(self, mock_cls: MagicMock, loc: str) -> None:
        _mock_client(mock_cls, {"loc": loc})
        with pytest.raises(WhereamiError):
            locate(URL, timeout_s=3.0)
