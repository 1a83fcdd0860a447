import pytest
import requests

import download_counters
import download_covid_cases
import download_weather_noaa


class FakeResponse:
    def __init__(self, body=b"Date,X Total,North\n", status=200):
        self.body = body
        self.status = status
        self.text = body.decode("utf-8")

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def iter_content(self, chunk_size=1):
        yield self.body


def test_counter_url():
    url = download_counters.counter_csv_url("65db-xm6k")
    assert url == "https://data.seattle.gov/api/views/65db-xm6k/rows.csv?accessType=DOWNLOAD"


def test_download_counter_files(monkeypatch, tmp_path):
    calls = []

    def fake_get(url, **kwargs):
        calls.append(url)
        return FakeResponse()

    monkeypatch.setattr(download_counters.requests, "get", fake_get)

    saved = download_counters.download_counter_files(["fremont_bridge"], out_dir=tmp_path)

    assert saved == [tmp_path / "fremont_bridge.csv"]
    assert (tmp_path / "fremont_bridge.csv").read_bytes() == b"Date,X Total,North\n"
    assert not (tmp_path / "fremont_bridge.csv.part").exists()
    assert len(calls) == 1

    # second run skips the existing file
    again = download_counters.download_counter_files(["fremont_bridge"], out_dir=tmp_path)
    assert again == [tmp_path / "fremont_bridge.csv"]
    assert len(calls) == 1


def test_download_counter_http_error_is_skipped(monkeypatch, tmp_path):
    monkeypatch.setattr(download_counters.requests, "get",
                        lambda url, **kw: FakeResponse(status=404))

    saved = download_counters.download_counter_files(["spokane_st_bridge"], out_dir=tmp_path)

    assert saved == []


def test_unknown_counter(tmp_path):
    with pytest.raises(ValueError):
        download_counters.download_counter_files(["nowhere"], out_dir=tmp_path)


def test_noaa_requires_token(monkeypatch):
    monkeypatch.delenv("NOAA_TOKEN", raising=False)

    with pytest.raises(ValueError):
        download_weather_noaa.download_noaa_daily()


def test_noaa_download(monkeypatch, tmp_path):
    captured = {}

    def fake_get(url, params=None, headers=None, timeout=None):
        captured.update(params=params, headers=headers)
        return FakeResponse(b"STATION,DATE,PRCP,TAVG\n")

    monkeypatch.setattr(download_weather_noaa.requests, "get", fake_get)
    monkeypatch.setattr(download_weather_noaa, "WEATHER_RAW_DIR", tmp_path)

    out = download_weather_noaa.download_noaa_daily(token="abc", out_name="w.csv")

    assert out == tmp_path / "w.csv"
    assert captured["headers"] == {"token": "abc"}
    assert captured["params"]["dataTypes"] == "PRCP,TAVG"


def test_covid_download_skips_existing(monkeypatch, tmp_path):
    monkeypatch.setattr(download_covid_cases, "COVID_RAW_DIR", tmp_path)
    (tmp_path / "us-counties.csv").write_text("date,county,cases\n")

    def boom(url, dest):
        raise AssertionError("should not download")

    monkeypatch.setattr(download_covid_cases, "download_file", boom)

    assert download_covid_cases.download_county_cases() == tmp_path / "us-counties.csv"
