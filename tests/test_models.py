"""Tests for PictureRecord parsing."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from pyapod.models.picture import MediaType, PictureRecord, parse_feed_date

SAMPLE_PAYLOAD: dict = {
    "copyright": "Jane Astronomer",
    "date": "2024-03-01",
    "explanation": "A spiral galaxy seen edge-on.",
    "hdurl": "https://apod.nasa.gov/apod/image/2403/galaxy_big.jpg",
    "media_type": "image",
    "service_version": "v1",
    "title": "Edge-on Spiral",
    "url": "https://apod.nasa.gov/apod/image/2403/galaxy.jpg",
}


class TestMediaType:
    def test_known_values(self) -> None:
        assert MediaType("image") is MediaType.IMAGE
        assert MediaType("video") is MediaType.VIDEO

    def test_unknown_value_falls_back(self) -> None:
        assert MediaType("other") is MediaType.UNSUPPORTED


class TestPictureRecord:
    def test_fields_match_payload(self) -> None:
        record = PictureRecord.model_validate(SAMPLE_PAYLOAD)
        assert record.date == "2024-03-01"
        assert record.title == "Edge-on Spiral"
        assert record.explanation == "A spiral galaxy seen edge-on."
        assert record.media_url == SAMPLE_PAYLOAD["url"]
        assert record.hd_url == SAMPLE_PAYLOAD["hdurl"]
        assert record.media_type is MediaType.IMAGE
        assert record.service_version == "v1"
        assert record.copyright == "Jane Astronomer"

    def test_raw_payload_kept(self) -> None:
        record = PictureRecord.model_validate(SAMPLE_PAYLOAD)
        assert record.raw == SAMPLE_PAYLOAD

    def test_raw_payload_is_read_only(self) -> None:
        payload = dict(SAMPLE_PAYLOAD, resources={"image_set": "apod"}, concepts=["galaxy"])
        record = PictureRecord.model_validate(payload)
        with pytest.raises(TypeError):
            record.raw["title"] = "changed"  # type: ignore[index]
        with pytest.raises(TypeError):
            record.raw["resources"]["image_set"] = "other"  # type: ignore[index]
        assert record.raw["concepts"] == ("galaxy",)

    def test_raw_payload_detached_from_source(self) -> None:
        payload = dict(SAMPLE_PAYLOAD, resources={"image_set": "apod"})
        record = PictureRecord.model_validate(payload)
        payload["title"] = "changed"
        payload["resources"]["image_set"] = "other"
        assert record.raw["title"] == "Edge-on Spiral"
        assert record.raw["resources"]["image_set"] == "apod"

    def test_wire_key_named_raw_stays_in_payload(self) -> None:
        record = PictureRecord.model_validate(dict(SAMPLE_PAYLOAD, raw="x"))
        assert record.raw["raw"] == "x"
        assert record.raw["title"] == "Edge-on Spiral"
        assert record.raw["url"] == SAMPLE_PAYLOAD["url"]

    def test_missing_hdurl_is_none(self) -> None:
        payload = {k: v for k, v in SAMPLE_PAYLOAD.items() if k not in ("hdurl", "copyright")}
        record = PictureRecord.model_validate(payload)
        assert record.hd_url is None
        assert record.copyright is None
        assert record.preferred_url == SAMPLE_PAYLOAD["url"]

    def test_preferred_url_uses_hd(self) -> None:
        record = PictureRecord.model_validate(SAMPLE_PAYLOAD)
        assert record.preferred_url == SAMPLE_PAYLOAD["hdurl"]

    def test_video_entry(self) -> None:
        payload = dict(SAMPLE_PAYLOAD, media_type="video", url="https://www.youtube.com/embed/abc")
        del payload["hdurl"]
        record = PictureRecord.model_validate(payload)
        assert record.is_video
        assert not record.is_image

    def test_unsupported_media_type_still_decodes(self) -> None:
        record = PictureRecord.model_validate(dict(SAMPLE_PAYLOAD, media_type="interactive"))
        assert record.media_type is MediaType.UNSUPPORTED

    def test_non_string_media_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PictureRecord.model_validate(dict(SAMPLE_PAYLOAD, media_type=3))

    @pytest.mark.parametrize(
        "missing",
        ["date", "explanation", "media_type", "service_version", "title", "url"],
    )
    def test_missing_required_field_rejected(self, missing: str) -> None:
        payload = {k: v for k, v in SAMPLE_PAYLOAD.items() if k != missing}
        with pytest.raises(ValidationError):
            PictureRecord.model_validate(payload)

    def test_extra_keys_ignored(self) -> None:
        record = PictureRecord.model_validate(dict(SAMPLE_PAYLOAD, thumbnail_url="x"))
        assert not hasattr(record, "thumbnail_url")

    def test_frozen(self) -> None:
        record = PictureRecord.model_validate(SAMPLE_PAYLOAD)
        with pytest.raises(ValidationError):
            record.title = "changed"  # type: ignore[misc]

    def test_day_property(self) -> None:
        assert PictureRecord.model_validate(SAMPLE_PAYLOAD).day == date(2024, 3, 1)


class TestRecordDate:
    @pytest.mark.parametrize("value", ["2024-02-30", "2024/03/01", "2024-3-1", "yesterday"])
    def test_malformed_dates_rejected(self, value: str) -> None:
        with pytest.raises(ValidationError):
            PictureRecord.model_validate(dict(SAMPLE_PAYLOAD, date=value))

    def test_feed_epoch_accepted(self) -> None:
        record = PictureRecord.model_validate(dict(SAMPLE_PAYLOAD, date="1995-06-16"))
        assert record.day == date(1995, 6, 16)

    def test_before_feed_epoch_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PictureRecord.model_validate(dict(SAMPLE_PAYLOAD, date="1995-06-15"))

    def test_after_today_rejected_with_context(self) -> None:
        with pytest.raises(ValidationError):
            PictureRecord.model_validate(SAMPLE_PAYLOAD, context={"today": date(2024, 2, 29)})

    def test_today_accepted_with_context(self) -> None:
        record = PictureRecord.model_validate(SAMPLE_PAYLOAD, context={"today": date(2024, 3, 1)})
        assert record.date == "2024-03-01"

    def test_parse_feed_date(self) -> None:
        assert parse_feed_date("2000-01-31") == date(2000, 1, 31)
        with pytest.raises(ValueError):
            parse_feed_date("2000-1-31")
