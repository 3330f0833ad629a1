"""
Unit tests for debounced stop suggestions.
"""

import threading
import time

import pytest

from bresttrans.core.debounce import Debouncer, SuggestionFilter, filter_suggestions

STOPS = ["Вокзал", "Площадь Ленина", "Центральный рынок", "Ленинградская"]


class TestFilterSuggestions:
    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_query(self, query):
        assert filter_suggestions(query, STOPS) == []

    def test_case_insensitive_substring(self):
        assert filter_suggestions("ЛЕНИН", STOPS) == ["Площадь Ленина", "Ленинградская"]

    def test_no_match(self):
        assert filter_suggestions("метро", STOPS) == []


class TestDebouncer:
    def test_only_last_call_runs(self):
        calls = []
        done = threading.Event()

        def record(value):
            calls.append(value)
            done.set()

        debouncer = Debouncer(delay=0.05)
        for value in ("В", "Во", "Вок"):
            debouncer.call(record, value)

        assert done.wait(timeout=2)
        time.sleep(0.1)
        assert calls == ["Вок"]

    def test_cancel(self):
        calls = []
        debouncer = Debouncer(delay=0.05)
        debouncer.call(calls.append, "x")
        assert debouncer.pending

        debouncer.cancel()
        time.sleep(0.1)

        assert calls == []
        assert not debouncer.pending


class TestSuggestionFilter:
    def test_emits_filtered_options(self):
        results = []
        done = threading.Event()

        def on_suggestions(suggestions):
            results.append(suggestions)
            done.set()

        suggestions = SuggestionFilter(lambda: STOPS, on_suggestions, delay=0.02)
        suggestions.text_changed("ры")
        suggestions.text_changed("рын")

        assert done.wait(timeout=2)
        time.sleep(0.05)
        assert results == [["Центральный рынок"]]

    def test_options_read_when_timer_fires(self):
        options = ["A"]
        done = threading.Event()
        results = []

        def on_suggestions(suggestions):
            results.append(suggestions)
            done.set()

        suggestions = SuggestionFilter(lambda: options, on_suggestions, delay=0.05)
        suggestions.text_changed("b")
        options.append("B")

        assert done.wait(timeout=2)
        assert results == [["B"]]
