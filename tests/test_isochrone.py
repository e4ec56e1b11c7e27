"""Tests for the isochrone request builders and decoders."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import Mock, patch

import numpy as np
import pytest
import requests
from conftest import PNG_BYTES, PUBTRANS_URL, grid_data_uri, png_data_uri

from walkalytics.datasources import isochrone as iso
from walkalytics.datasources.isochrone.png import png_path
from walkalytics.exceptions import (
    DimensionMismatch,
    EmptyResult,
    MalformedPayload,
    MissingRequiredField,
    UnexpectedStatus,
    WrongEndpoint,
)
from walkalytics.schemas import Poi

MakeResponse = Callable[..., requests.Response]

POST = "walkalytics.datasources.isochrone.query.session.post"


# =============================================================================
# Request builders
# =============================================================================


class TestIsochroneQuery:
    """Request construction; the session is mocked."""

    @patch(POST)
    def test_query_params_and_header(self, mock_post: Mock) -> None:
        iso.isochrone(895815, 6004839, key="abcd1234")

        mock_post.assert_called_once()
        args, kwargs = mock_post.call_args
        assert args[0] == "https://api.walkalytics.com/v1/isochrone"
        assert kwargs["params"] == {
            "x": 895815,
            "y": 6004839,
            "epsg": 3857,
            "max_min": 1000,
            "only_pois": "FALSE",
            "raw_data": "FALSE",
            "break_values": "0, 3, 6, 9, 13",
        }
        assert kwargs["headers"] == {"Ocp-Apim-Subscription-Key": "abcd1234"}
        assert kwargs["json"] is None

    @patch(POST)
    def test_returns_response(self, mock_post: Mock) -> None:
        assert iso.isochrone(1, 2, key="k") is mock_post.return_value

    @patch(POST)
    def test_poi_body(self, mock_post: Mock) -> None:
        pois = [{"X": 895777, "Y": 6004833, "ID": "pupil1"}, Poi(x=896044, y=6004886)]
        iso.isochrone(895815, 6004839, pois=pois, key="k")

        body = mock_post.call_args.kwargs["json"]
        assert body["type"] == "FeatureCollection"
        assert body["crs"] == {"type": "EPSG", "properties": {"code": 3857}}
        assert body["features"] == [
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [895777.0, 6004833.0]},
                "properties": {"id": "pupil1"},
            },
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [896044.0, 6004886.0]},
                "properties": {"id": ""},
            },
        ]

    @patch(POST)
    def test_png_variant(self, mock_post: Mock) -> None:
        iso.isochrone_png(1, 2, break_values=[0, 5, 10.5], key="k")
        params = mock_post.call_args.kwargs["params"]
        assert params["raw_data"] == "FALSE"
        assert params["break_values"] == "0, 5, 10.5"

    @patch(POST)
    def test_esri_variant(self, mock_post: Mock) -> None:
        iso.isochrone_esri(1, 2, max_min=20, key="k")
        params = mock_post.call_args.kwargs["params"]
        assert params["raw_data"] == "TRUE"
        assert params["max_min"] == 20
        assert "break_values" not in params

    @patch(POST)
    def test_pois_variant(self, mock_post: Mock) -> None:
        iso.isochrone_pois(1, 2, [{"x": 3, "y": 4}], key="k")
        kwargs = mock_post.call_args.kwargs
        assert kwargs["params"]["only_pois"] == "TRUE"
        assert "break_values" not in kwargs["params"]
        assert len(kwargs["json"]["features"]) == 1

    @patch(POST)
    def test_key_from_settings(self, mock_post: Mock, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WALKALYTICS_API_KEY", "from-env")
        iso.isochrone(1, 2)
        assert mock_post.call_args.kwargs["headers"]["Ocp-Apim-Subscription-Key"] == "from-env"

    @patch(POST)
    def test_api_url_from_settings(self, mock_post: Mock, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WALKALYTICS_API_URL", "http://localhost:8080/v1/")
        iso.isochrone(1, 2, key="k")
        assert mock_post.call_args.args[0] == "http://localhost:8080/v1/isochrone"

    @pytest.mark.parametrize(
        ("x", "y", "key"),
        [(None, 2, "k"), (1, None, "k"), (1, 2, None)],
    )
    @patch(POST)
    def test_missing_field_sends_nothing(
        self, mock_post: Mock, x: float | None, y: float | None, key: str | None
    ) -> None:
        with pytest.raises(MissingRequiredField):
            iso.isochrone(x, y, key=key)
        mock_post.assert_not_called()

    @patch(POST)
    def test_poi_without_coordinate_sends_nothing(self, mock_post: Mock) -> None:
        with pytest.raises(MissingRequiredField, match="y of points-of-interest"):
            iso.isochrone_pois(1, 2, [{"x": 3, "id": "a"}], key="k")
        mock_post.assert_not_called()

    @pytest.mark.parametrize(
        ("poi", "message"),
        [
            ({"x": "", "y": "4", "id": "a"}, "x of points-of-interest"),
            ({"x": "3", "y": "  ", "id": "a"}, "y of points-of-interest"),
            ({"x": "east", "y": "4", "id": "a"}, "invalid coordinates"),
            ({"x": "nan", "y": "4", "id": "a"}, "invalid coordinates"),
        ],
    )
    @patch(POST)
    def test_unusable_poi_coordinate_sends_nothing(
        self, mock_post: Mock, poi: dict[str, str], message: str
    ) -> None:
        with pytest.raises(MissingRequiredField, match=message):
            iso.isochrone_pois(1, 2, [poi], key="k")
        mock_post.assert_not_called()

    @patch(POST)
    def test_large_break_values_not_rounded(self, mock_post: Mock) -> None:
        iso.isochrone_png(1, 2, break_values=[0, 1234567, 2.25], key="k")
        assert mock_post.call_args.kwargs["params"]["break_values"] == "0, 1234567, 2.25"

    @patch(POST)
    def test_empty_pois_sends_nothing(self, mock_post: Mock) -> None:
        with pytest.raises(MissingRequiredField):
            iso.isochrone_pois(1, 2, [], key="k")
        mock_post.assert_not_called()


# =============================================================================
# save_png
# =============================================================================


class TestSavePng:
    def test_writes_png(self, make_response: MakeResponse, tmp_path: Path) -> None:
        out = iso.save_png(make_response({"img": png_data_uri()}), tmp_path / "walk.png")
        assert out == tmp_path / "walk.png"
        assert out.read_bytes() == PNG_BYTES

    def test_appends_extension(self, make_response: MakeResponse, tmp_path: Path) -> None:
        out = iso.save_png(make_response({"img": png_data_uri()}), tmp_path / "walk")
        assert out.name == "walk.png"
        assert out.exists()

    def test_png_path(self) -> None:
        assert png_path("") == Path("isochrone.png")
        assert png_path("map.PNG") == Path("map.PNG")
        assert png_path("map") == Path("map.png")

    def test_missing_img(self, make_response: MakeResponse, tmp_path: Path) -> None:
        with pytest.raises(MalformedPayload):
            iso.save_png(make_response({"raw_data": grid_data_uri()}), tmp_path / "x.png")
        assert not (tmp_path / "x.png").exists()

    def test_status_error(self, make_response: MakeResponse, tmp_path: Path) -> None:
        with pytest.raises(UnexpectedStatus):
            iso.save_png(make_response({"img": png_data_uri()}, status=401), tmp_path / "x.png")


# =============================================================================
# esri_to_grid / pixel_walktimes
# =============================================================================


class TestEsri:
    def test_esri_to_grid(self, make_response: MakeResponse) -> None:
        grid = iso.esri_to_grid(make_response({"raw_data": grid_data_uri()}))
        assert grid.shape == (2, 2)
        assert grid.anchor == (5.0, 5.0)
        assert np.isnan(grid.values[0, 1])

    def test_pixel_walktimes(self, make_response: MakeResponse) -> None:
        rows = iso.pixel_walktimes(make_response({"raw_data": grid_data_uri()}), drop_missing=True)
        assert [(r.walktime, r.x, r.y) for r in rows] == [
            (1.0, 5.0, 15.0),
            (3.0, 5.0, 5.0),
            (4.0, 15.0, 5.0),
        ]

    def test_marker_absent(self, make_response: MakeResponse) -> None:
        with pytest.raises(MalformedPayload):
            iso.esri_to_grid(make_response({"raw_data": "data:application/gzip;base64,"}))

    def test_png_payload_is_not_a_grid(self, make_response: MakeResponse) -> None:
        with pytest.raises(MalformedPayload):
            iso.esri_to_grid(make_response({"raw_data": png_data_uri()}))

    def test_dimension_mismatch(self, make_response: MakeResponse) -> None:
        text = "ncols 2\nnrows 2\nxllcorner 0\nyllcorner 0\ncellsize 10\nnodata_value -9999\n1 2 3\n"
        with pytest.raises(DimensionMismatch):
            iso.esri_to_grid(make_response({"raw_data": grid_data_uri(text)}))

    @pytest.mark.parametrize("status", [404, 500])
    def test_status_error(self, make_response: MakeResponse, status: int) -> None:
        with pytest.raises(UnexpectedStatus) as excinfo:
            iso.pixel_walktimes(make_response(b"Not Found", status=status))
        assert excinfo.value.status_code == status

    def test_wrong_endpoint(self, make_response: MakeResponse) -> None:
        with pytest.raises(WrongEndpoint):
            iso.esri_to_grid(make_response({"raw_data": grid_data_uri()}, url=PUBTRANS_URL))


# =============================================================================
# pois_walktimes
# =============================================================================


class TestPoisWalktimes:
    def _body(self) -> dict[str, object]:
        return {
            "pois": {
                "type": "FeatureCollection",
                "features": [
                    {"geometry": {"coordinates": [1, 2]}, "properties": {"id": "A", "time": 500}},
                    {"geometry": {"coordinates": [3, 4]}, "properties": {"id": "B", "time": 100}},
                ],
            }
        }

    def test_sorted_table(self, make_response: MakeResponse) -> None:
        rows = iso.pois_walktimes(make_response(self._body()))
        assert [r.model_dump() for r in rows] == [
            {"id": "B", "walktime": 100.0, "x": 3.0, "y": 4.0},
            {"id": "A", "walktime": 500.0, "x": 1.0, "y": 2.0},
        ]

    @pytest.mark.parametrize("body", [{}, {"pois": None}, {"pois": {}}, {"pois": {"features": []}}])
    def test_empty(self, make_response: MakeResponse, body: dict[str, object]) -> None:
        with pytest.raises(EmptyResult):
            iso.pois_walktimes(make_response(body))

    def test_status_error(self, make_response: MakeResponse) -> None:
        with pytest.raises(UnexpectedStatus):
            iso.pois_walktimes(make_response(self._body(), status=404))

    def test_not_an_object(self, make_response: MakeResponse) -> None:
        with pytest.raises(MalformedPayload):
            iso.pois_walktimes(make_response([1, 2, 3]))
