"""Tests for the Aggregator and its Results snapshot."""
from __future__ import annotations

import dataclasses

import pytest

from accesslens.analytics.aggregator import AlreadyFinalized, Aggregator
from accesslens.config import CONTINENTS, HOURS, METHODS, PROTOCOLS, STATUS_CODE_MAX
from accesslens.geo.locator import NullGeoLocator

from .conftest import SAMPLE_LINE, make_line


def _histograms(results):
    return (
        results.status, results.methods, results.protocols,
        results.hours, results.continents, results.countries,
    )


class TestEmptyRun:
    def test_finalize_without_lines(self):
        results = Aggregator().finalize("empty.log", 0)
        assert results.processed_lines == 0
        assert results.hits == 0
        assert results.visits == 0
        assert results.bandwidth == 0
        assert results.valid_ratio == 0.0
        assert len(results.status) == STATUS_CODE_MAX
        assert len(results.hours) == HOURS
        assert len(results.methods) == len(METHODS)
        assert len(results.protocols) == len(PROTOCOLS)
        assert len(results.continents) == len(CONTINENTS)
        assert results.countries == ()


class TestSingleLine:
    def test_sample_line_end_to_end(self, geo):
        agg = Aggregator(precision=10, country_count=geo.country_count)
        assert agg.process_line(SAMPLE_LINE, geo) is not None
        results = agg.finalize("access.log", 123, runtime=0.5)

        assert results.file_name == "access.log"
        assert results.file_size == 123
        assert results.runtime == 0.5
        assert results.hits_ipv4 == 1
        assert results.hits_ipv6 == 0
        assert results.hits == 1
        assert results.processed_lines == 1
        assert results.invalid_lines == 0
        assert results.visits_ipv4 == 1
        assert results.visits == 1
        assert results.hours[13] == 1
        assert results.methods[METHODS.index("GET")] == 1
        assert results.protocols[PROTOCOLS.index("HTTP/1.1")] == 1
        assert results.status[200] == 1
        assert results.bandwidth == 1024
        assert results.countries[0] == 1
        assert results.continents[CONTINENTS.index("EU")] == 1
        assert sum(results.hours) == 1
        assert sum(results.status) == 1

    def test_ipv6_line(self, geo):
        agg = Aggregator(precision=10, country_count=geo.country_count)
        agg.process_line(make_line(host="2001:db8::5"), geo)
        results = agg.finalize()
        assert results.hits_ipv6 == 1
        assert results.visits_ipv6 == 1
        assert results.visits_ipv4 == 0
        assert results.countries[1] == 1
        assert results.continents[CONTINENTS.index("AS")] == 1


class TestInvalidLines:
    @pytest.mark.parametrize("raw", [
        "",
        "\n",
        make_line(host="not-an-ip"),
        make_line(host="-"),
        make_line(host="fe80::1%eth0"),
        "garbage garbage garbage",
    ])
    def test_only_invalid_counter_moves(self, geo, raw):
        agg = Aggregator(precision=8, country_count=geo.country_count)
        assert agg.process_line(raw, geo) is None
        results = agg.finalize()
        assert results.invalid_lines == 1
        assert results.processed_lines == 1
        assert results.hits == 0
        assert results.bandwidth == 0
        assert results.visits == 0
        for histogram in _histograms(results):
            assert sum(histogram) == 0


class TestPartialLines:
    def test_bad_subfields_count_as_hit_only(self, geo):
        agg = Aggregator(precision=8, country_count=geo.country_count)
        agg.process_line(
            make_line(date="10/Oct/2023:24:00:00 +0000", request="-",
                      status="abc", size="-1"),
            geo,
        )
        results = agg.finalize()
        assert results.hits == 1
        assert results.invalid_lines == 0
        assert sum(results.hours) == 0
        assert sum(results.status) == 0
        assert sum(results.methods) == 0
        assert sum(results.protocols) == 0
        assert results.bandwidth == 0
        # geo still resolves from the address alone
        assert results.countries[0] == 1

    def test_short_line_with_valid_host_is_a_hit(self):
        agg = Aggregator(precision=8)
        agg.process_line("192.0.2.1", NullGeoLocator())
        results = agg.finalize()
        assert results.hits_ipv4 == 1
        assert results.invalid_lines == 0

    def test_unknown_method_and_protocol_ignored(self):
        agg = Aggregator(precision=8)
        agg.process_line(make_line(request="BREW /pot HTTP/0.9"), NullGeoLocator())
        results = agg.finalize()
        assert sum(results.methods) == 0
        assert sum(results.protocols) == 0
        assert results.status[200] == 1


class TestBandwidth:
    def test_exact_sum_beyond_64_bits(self):
        high = (1 << 63) - 1
        agg = Aggregator(precision=8)
        geo = NullGeoLocator()
        for _ in range(3):
            agg.process_line(make_line(size=str(high)), geo)
        agg.process_line(make_line(size=str(high + 1)), geo)  # out of range
        agg.process_line(make_line(size="7"), geo)
        assert agg.finalize().bandwidth == 3 * high + 7


class TestInvariants:
    def test_totals_over_mixed_stream(self, geo):
        lines = [
            make_line(host="192.0.2.1"),
            make_line(host="192.0.2.2", status="404"),
            make_line(host="192.0.2.1", status="9999"),
            make_line(host="2001:db8::1", status="301"),
            make_line(host="2001:db8::2", status="-"),
            make_line(host="bogus"),
            "",
            make_line(host="198.51.100.4", date="bad"),
        ]
        agg = Aggregator(precision=12, country_count=geo.country_count)
        for raw in lines:
            agg.process_line(raw, geo)
        results = agg.finalize()

        assert results.hits_ipv4 == 4
        assert results.hits_ipv6 == 2
        assert results.invalid_lines == 2
        assert results.processed_lines == (
            results.hits_ipv4 + results.hits_ipv6 + results.invalid_lines
        )
        assert sum(results.status) == 4
        assert sum(results.status) <= results.hits
        assert results.visits_ipv4 == 3
        assert results.visits_ipv6 == 2
        assert results.visits == results.visits_ipv4 + results.visits_ipv6
        # 198.51.100.4 is outside every table entry
        assert sum(results.countries) == 5

    def test_continents_never_exceed_countries(self, geo):
        agg = Aggregator(precision=8, country_count=geo.country_count)
        for host in ("192.0.2.1", "2001:db8::1", "203.0.113.9", "198.51.100.1"):
            agg.process_line(make_line(host=host), geo)
        results = agg.finalize()
        assert sum(results.continents) == 2
        assert sum(results.continents) <= sum(results.countries)

    def test_lines_seen_tracks_progress(self):
        agg = Aggregator(precision=8)
        geo = NullGeoLocator()
        agg.process_line(SAMPLE_LINE, geo)
        agg.process_line("", geo)
        assert agg.lines_seen == 2

    def test_country_ids_outside_histogram_are_ignored(self, geo):
        agg = Aggregator(precision=8, country_count=0)
        agg.process_line(SAMPLE_LINE, geo)
        results = agg.finalize()
        assert results.countries == ()
        assert sum(results.continents) == 0


class TestFinalize:
    def test_results_are_frozen(self):
        results = Aggregator(precision=8).finalize()
        with pytest.raises(dataclasses.FrozenInstanceError):
            results.hits = 5
        assert isinstance(results.status, tuple)

    def test_no_mutation_after_finalize(self):
        agg = Aggregator(precision=8)
        agg.finalize()
        assert agg.finalized
        with pytest.raises(AlreadyFinalized):
            agg.process_line(SAMPLE_LINE, NullGeoLocator())
        with pytest.raises(AlreadyFinalized):
            agg.record_invalid()
        with pytest.raises(AlreadyFinalized):
            agg.finalize()

    def test_timestamp_format(self):
        results = Aggregator(precision=8).finalize()
        date, _, clock = results.timestamp.partition(" ")
        assert len(date) == 10 and date.count("-") == 2
        assert len(clock) == 8 and clock.count(":") == 2
