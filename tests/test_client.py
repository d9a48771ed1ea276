"""Tests for StatisticsClient."""

import json
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from typing import Any

import httpx
import pytest
import respx

from qiniu_stats_sdk import (
    BlobIORecord,
    BlobIORequest,
    BlobTransferRequest,
    CountLineRequest,
    CountLineResponse,
    CountRequest,
    CountResponse,
    Credentials,
    DecodeError,
    Granularity,
    HitsRecord,
    RsPutRequest,
    RSChTypeRequest,
    SigningError,
    SizeRecord,
    SpaceLineRequest,
    SpaceLineResponse,
    SpaceRequest,
    SpaceResponse,
    StatisticsClient,
    TransportError,
)

BASE_URL = "https://api.qiniu.com"

RANGE: dict[str, Any] = {
    "begin": "20200101000000",
    "end": "20200102000000",
    "granularity": "hour",
}

SERIES = {"times": [1577808000, 1577811600], "datas": [1024, 2048]}

# (method, path, request, canned body, expected result)
CASES = [
    (
        "get_space",
        "/v6/space",
        SpaceRequest(bucket="b1", **RANGE),
        SERIES,
        SpaceResponse(times=(1577808000, 1577811600), datas=(1024, 2048)),
    ),
    (
        "get_count",
        "/v6/count",
        CountRequest(bucket="b1", **RANGE),
        SERIES,
        CountResponse(times=(1577808000, 1577811600), datas=(1024, 2048)),
    ),
    (
        "get_space_line",
        "/v6/space_line",
        SpaceLineRequest(bucket="b1", region="z0", **RANGE),
        {"code": 200, "error": "", **SERIES},
        SpaceLineResponse(
            times=(1577808000, 1577811600), datas=(1024, 2048), code=200, error=""
        ),
    ),
    (
        "get_count_line",
        "/v6/count_line",
        CountLineRequest(bucket="b1", region="z0", **RANGE),
        SERIES,
        CountLineResponse(times=(1577808000, 1577811600), datas=(1024, 2048)),
    ),
    (
        "get_blob_transfer",
        "/v6/blob_transfer",
        BlobTransferRequest(is_oversea=0, task_id="t1", **RANGE),
        [{"time": "2020-01-01T00:00:00+08:00", "values": {"size": 4096}}],
        [SizeRecord(time="2020-01-01T00:00:00+08:00", size=4096)],
    ),
    (
        "get_rs_chtype",
        "/v6/rs_chtype",
        RSChTypeRequest(bucket="b1", region="z0", **RANGE),
        [
            {"time": "2020-01-01T00:00:00+08:00", "values": {"hits": 3}},
            {"time": "2020-01-01T01:00:00+08:00", "values": {"hits": 5}},
        ],
        [
            HitsRecord(time="2020-01-01T00:00:00+08:00", hits=3),
            HitsRecord(time="2020-01-01T01:00:00+08:00", hits=5),
        ],
    ),
    (
        "get_blob_io",
        "/v6/blob_io",
        BlobIORequest(bucket="b1", region="z0", src="origin", **RANGE),
        [{"time": "2020-01-01T00:00:00+08:00", "values": {"hits": 7, "flow": 8192}}],
        [BlobIORecord(time="2020-01-01T00:00:00+08:00", hits=7, flow=8192)],
    ),
    (
        "get_rs_put",
        "/v6/rs_put",
        RsPutRequest(bucket="b1", region="z0", **RANGE),
        [{"time": "2020-01-01T00:00:00+08:00", "values": {"hits": 11}}],
        [HitsRecord(time="2020-01-01T00:00:00+08:00", hits=11)],
    ),
]

CASE_IDS = [case[0] for case in CASES]


class TestQueries:
    @pytest.mark.parametrize("method,path,request_,body,expected", CASES, ids=CASE_IDS)
    @respx.mock
    def test_decodes_canned_body(
        self,
        client: StatisticsClient,
        method: str,
        path: str,
        request_: Any,
        body: Any,
        expected: Any,
    ) -> None:
        route = respx.post(f"{BASE_URL}{path}").mock(
            return_value=httpx.Response(200, json=body)
        )

        result = getattr(client, method)(request_)

        assert result == expected
        assert route.call_count == 1

    @pytest.mark.parametrize("method,path,request_,body,expected", CASES, ids=CASE_IDS)
    @respx.mock
    def test_non_json_body_raises_decode_error(
        self,
        client: StatisticsClient,
        method: str,
        path: str,
        request_: Any,
        body: Any,
        expected: Any,
    ) -> None:
        respx.post(f"{BASE_URL}{path}").mock(
            return_value=httpx.Response(200, content=b"<html>oops</html>")
        )

        with pytest.raises(DecodeError) as exc_info:
            getattr(client, method)(request_)

        assert exc_info.value.body == b"<html>oops</html>"

    @pytest.mark.parametrize("method,path,request_,body,expected", CASES, ids=CASE_IDS)
    @respx.mock
    def test_signing_error_skips_network(
        self,
        method: str,
        path: str,
        request_: Any,
        body: Any,
        expected: Any,
    ) -> None:
        route = respx.post(f"{BASE_URL}{path}").mock(
            return_value=httpx.Response(200, json=body)
        )

        with StatisticsClient(credentials=Credentials("ak", "")) as client:
            with pytest.raises(SigningError):
                getattr(client, method)(request_)

        assert not route.called

    @pytest.mark.parametrize("method,path,request_,body,expected", CASES, ids=CASE_IDS)
    @respx.mock
    def test_connection_failure_raises_transport_error(
        self,
        client: StatisticsClient,
        method: str,
        path: str,
        request_: Any,
        body: Any,
        expected: Any,
    ) -> None:
        respx.post(f"{BASE_URL}{path}").mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(TransportError):
            getattr(client, method)(request_)


class TestErrorBodies:
    @respx.mock
    def test_series_error_body_decodes_to_empty(self, client: StatisticsClient) -> None:
        respx.post(f"{BASE_URL}/v6/space").mock(
            return_value=httpx.Response(401, json={"error": "bad token"})
        )

        result = client.get_space(SpaceRequest(bucket="b1", **RANGE))

        assert result == SpaceResponse()

    @respx.mock
    def test_space_line_error_body_keeps_error(self, client: StatisticsClient) -> None:
        respx.post(f"{BASE_URL}/v6/space_line").mock(
            return_value=httpx.Response(400, json={"code": 400, "error": "invalid region"})
        )

        result = client.get_space_line(SpaceLineRequest(bucket="b1", **RANGE))

        assert result.code == 400
        assert result.error == "invalid region"
        assert result.times == ()

    @respx.mock
    def test_records_error_body_raises_decode_error(self, client: StatisticsClient) -> None:
        respx.post(f"{BASE_URL}/v6/blob_io").mock(
            return_value=httpx.Response(401, json={"error": "bad token"})
        )

        with pytest.raises(DecodeError):
            client.get_blob_io(BlobIORequest(bucket="b1", **RANGE))


class TestPathConstruction:
    @respx.mock
    def test_space_query_string_verbatim(self, client: StatisticsClient) -> None:
        route = respx.post(f"{BASE_URL}/v6/space").mock(
            return_value=httpx.Response(200, json=SERIES)
        )

        client.get_space(SpaceRequest(bucket="b1", **RANGE))

        assert route.calls.last.request.url.raw_path == (
            b"/v6/space?bucket=b1&begin=20200101000000&end=20200102000000&g=hour"
        )

    @respx.mock
    def test_rs_chtype_filter_params(self, client: StatisticsClient) -> None:
        route = respx.post(f"{BASE_URL}/v6/rs_chtype").mock(
            return_value=httpx.Response(200, json=[])
        )

        client.get_rs_chtype(RSChTypeRequest(bucket="b1", region="z0", **RANGE))

        assert route.calls.last.request.url.raw_path == (
            b"/v6/rs_chtype?begin=20200101000000&end=20200102000000&g=hour"
            b"&select=hits&$bucket=b1&$region=z0"
        )

    @respx.mock
    def test_dates_and_enum_formatted(self, client: StatisticsClient) -> None:
        route = respx.post(f"{BASE_URL}/v6/count").mock(
            return_value=httpx.Response(200, json=SERIES)
        )

        client.get_count(
            CountRequest(
                bucket="b1",
                begin=date(2020, 1, 1),
                end=datetime(2020, 1, 2, 12, 30, 5),
                granularity=Granularity.FIVE_MINUTES,
            )
        )

        assert route.calls.last.request.url.raw_path == (
            b"/v6/count?bucket=b1&begin=20200101000000&end=20200102123005&g=5min"
        )

    @respx.mock
    def test_signature_covers_query(self, client: StatisticsClient, credentials: Credentials) -> None:
        route = respx.post(f"{BASE_URL}/v6/space").mock(
            return_value=httpx.Response(200, json=SERIES)
        )

        client.get_space(SpaceRequest(bucket="b1", **RANGE))

        request = route.calls.last.request
        token = credentials.sign(request.url.raw_path.decode())
        assert request.headers["Authorization"] == f"QBox {token}"

    @respx.mock
    def test_escape_params(self, credentials: Credentials) -> None:
        route = respx.post(f"{BASE_URL}/v6/space").mock(
            return_value=httpx.Response(200, json=SERIES)
        )

        with StatisticsClient(credentials=credentials, escape_params=True) as client:
            client.get_space(SpaceRequest(bucket="a&b", **RANGE))

        assert route.calls.last.request.url.raw_path.startswith(b"/v6/space?bucket=a%26b&")


class TestConcurrency:
    @respx.mock
    def test_concurrent_calls_signed_independently(self, credentials: Credentials) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            expected = credentials.sign(request.url.raw_path.decode())
            if request.headers["Authorization"] != f"QBox {expected}":
                return httpx.Response(200, content=b"signature mismatch")
            index = int(request.url.params["bucket"].removeprefix("b"))
            return httpx.Response(200, json={"times": [index], "datas": [index * 10]})

        respx.post(f"{BASE_URL}/v6/space").mock(side_effect=handler)

        with StatisticsClient(credentials=credentials) as client:
            with ThreadPoolExecutor(max_workers=8) as pool:
                futures = {
                    i: pool.submit(client.get_space, SpaceRequest(bucket=f"b{i}", **RANGE))
                    for i in range(32)
                }
                results = {i: f.result() for i, f in futures.items()}

        for i, result in results.items():
            assert result == SpaceResponse(times=(i,), datas=(i * 10,))


class TestResultIndependence:
    @respx.mock
    def test_result_matches_independent_parse(self, client: StatisticsClient) -> None:
        raw = json.dumps(SERIES).encode()
        respx.post(f"{BASE_URL}/v6/space").mock(
            return_value=httpx.Response(200, content=raw)
        )

        result = client.get_space(SpaceRequest(bucket="b1", **RANGE))

        parsed = json.loads(raw)
        assert list(result.times) == parsed["times"]
        assert list(result.datas) == parsed["datas"]
