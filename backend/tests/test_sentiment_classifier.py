"""Tests for review sentiment classification.

Covers:
- Star label parsing and 1-2/3/4-5 mapping
- Remote classifier: success, empty/odd payloads -> NEUTRAL
- Remote classifier: non-2xx, network error, timeout, non-JSON -> ExternalApiError
- Keyword fallback: negation scoring, punctuation, case folding
- Factory: token present vs absent
"""

import json
import unittest

import httpx

from review_api.core.config import Settings
from review_api.core.errors import ExternalApiError
from review_api.schemas.review import ReviewType
from review_api.services.sentiment import KeywordSentimentClassifier, build_sentiment_classifier
from review_api.services.sentiment.contracts import StarRating
from review_api.services.sentiment.huggingface import (
    HuggingFaceSentimentClassifier,
    parse_ratings,
    parse_star_label,
    ratings_to_review_type,
)
from review_api.services.sentiment.keyword import keyword_score

MODEL_URL = "https://models.test/sentiment"


def _ratings_payload(best_label: str) -> list:
    labels = ["1 star", "2 stars", "3 stars", "4 stars", "5 stars"]
    return [[{"label": label, "score": 0.9 if label == best_label else 0.025} for label in labels]]


def _classifier(handler) -> HuggingFaceSentimentClassifier:
    return HuggingFaceSentimentClassifier(
        "hf_test_token",
        model_url=MODEL_URL,
        timeout_seconds=2.0,
        transport=httpx.MockTransport(handler),
    )


class StarLabelTests(unittest.TestCase):
    def test_parse_star_label(self):
        self.assertEqual(parse_star_label("1 star"), 1)
        self.assertEqual(parse_star_label("4 stars"), 4)
        self.assertEqual(parse_star_label("  5   stars "), 5)

    def test_parse_star_label_rejects_garbage(self):
        self.assertIsNone(parse_star_label(""))
        self.assertIsNone(parse_star_label("five stars"))
        self.assertIsNone(parse_star_label("0 stars"))
        self.assertIsNone(parse_star_label("6 stars"))

    def test_highest_score_wins(self):
        ratings = [
            StarRating("1 star", 0.05),
            StarRating("2 stars", 0.60),
            StarRating("5 stars", 0.35),
        ]
        self.assertEqual(ratings_to_review_type(ratings), ReviewType.NEGATIVE)

    def test_tie_keeps_first_seen(self):
        ratings = [StarRating("5 stars", 0.5), StarRating("1 star", 0.5)]
        self.assertEqual(ratings_to_review_type(ratings), ReviewType.POSITIVE)

    def test_empty_and_unparseable_are_neutral(self):
        self.assertEqual(ratings_to_review_type([]), ReviewType.NEUTRAL)
        self.assertEqual(ratings_to_review_type([StarRating("LABEL_0", 0.99)]), ReviewType.NEUTRAL)

    def test_parse_ratings_accepts_nested_and_flat(self):
        flat = [{"label": "3 stars", "score": 0.7}]
        self.assertEqual(parse_ratings([flat]), [StarRating("3 stars", 0.7)])
        self.assertEqual(parse_ratings(flat), [StarRating("3 stars", 0.7)])

    def test_parse_ratings_skips_malformed_items(self):
        payload = [[{"label": "4 stars"}, {"score": 0.3}, "x", {"label": "2 stars", "score": "high"}]]
        self.assertEqual(parse_ratings(payload), [])
        self.assertEqual(parse_ratings({"error": "loading"}), [])


class HuggingFaceClassifierTests(unittest.IsolatedAsyncioTestCase):
    async def test_star_labels_map_to_review_types(self):
        expected = {
            "1 star": ReviewType.NEGATIVE,
            "2 stars": ReviewType.NEGATIVE,
            "3 stars": ReviewType.NEUTRAL,
            "4 stars": ReviewType.POSITIVE,
            "5 stars": ReviewType.POSITIVE,
        }
        for label, review_type in expected.items():
            with self.subTest(label=label):
                classifier = _classifier(lambda request, label=label: httpx.Response(200, json=_ratings_payload(label)))
                self.assertEqual(await classifier.classify("some text"), review_type)

    async def test_sends_bearer_token_and_inputs(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_ratings_payload("5 stars"))

        await _classifier(handler).classify('Say "great" service')

        self.assertEqual(seen["auth"], "Bearer hf_test_token")
        self.assertEqual(seen["url"], MODEL_URL)
        self.assertEqual(seen["body"], {"inputs": 'Say "great" service'})

    async def test_empty_list_is_neutral(self):
        classifier = _classifier(lambda request: httpx.Response(200, json=[]))
        self.assertEqual(await classifier.classify("text"), ReviewType.NEUTRAL)

    async def test_empty_nested_list_is_neutral(self):
        classifier = _classifier(lambda request: httpx.Response(200, json=[[]]))
        self.assertEqual(await classifier.classify("text"), ReviewType.NEUTRAL)

    async def test_unexpected_json_shape_is_neutral(self):
        classifier = _classifier(lambda request: httpx.Response(200, json={"labels": ["5 stars"]}))
        self.assertEqual(await classifier.classify("text"), ReviewType.NEUTRAL)

    async def test_non_2xx_raises_external_api_error(self):
        classifier = _classifier(lambda request: httpx.Response(503, text="Model is loading"))
        with self.assertRaises(ExternalApiError) as ctx:
            await classifier.classify("text")
        self.assertEqual(ctx.exception.external_status_code, 503)
        self.assertEqual(ctx.exception.external_error_message, "Model is loading")
        self.assertEqual(ctx.exception.status_code, 502)
        self.assertEqual(ctx.exception.code, "EXTERNAL_API_ERROR")

    async def test_unauthorized_raises_external_api_error(self):
        classifier = _classifier(lambda request: httpx.Response(401, json={"error": "Invalid token"}))
        with self.assertRaises(ExternalApiError) as ctx:
            await classifier.classify("text")
        self.assertEqual(ctx.exception.external_status_code, 401)
        self.assertIn("Invalid token", ctx.exception.message)

    async def test_network_error_raises_external_api_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(ExternalApiError) as ctx:
            await _classifier(handler).classify("text")
        self.assertEqual(ctx.exception.external_status_code, 503)
        self.assertIn("connection refused", ctx.exception.external_error_message)

    async def test_timeout_raises_external_api_error(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        with self.assertRaises(ExternalApiError) as ctx:
            await _classifier(handler).classify("text")
        self.assertEqual(ctx.exception.external_status_code, 503)
        self.assertIn("timed out", ctx.exception.external_error_message)

    async def test_non_json_body_raises_external_api_error(self):
        classifier = _classifier(lambda request: httpx.Response(200, text="<html>gateway</html>"))
        with self.assertRaises(ExternalApiError) as ctx:
            await classifier.classify("text")
        self.assertEqual(ctx.exception.external_status_code, 502)


class KeywordClassifierTests(unittest.IsolatedAsyncioTestCase):
    async def _classify(self, text: str) -> ReviewType:
        return await KeywordSentimentClassifier().classify(text)

    async def test_positive_and_negative_words(self):
        self.assertEqual(await self._classify("Good product, great support"), ReviewType.POSITIVE)
        self.assertEqual(await self._classify("bad and slow"), ReviewType.NEGATIVE)

    async def test_negation_flips_next_word(self):
        self.assertEqual(await self._classify("not good"), ReviewType.NEGATIVE)
        self.assertEqual(await self._classify("never bad"), ReviewType.POSITIVE)
        self.assertEqual(await self._classify("without rude staff"), ReviewType.POSITIVE)

    async def test_negation_resets_after_one_word(self):
        # "very" consumes the negation, so "good" counts positively
        self.assertEqual(keyword_score("not very good"), 1)
        self.assertEqual(keyword_score("no bad, bad"), 0)

    async def test_case_and_punctuation_are_ignored(self):
        self.assertEqual(await self._classify("TERRIBLE!!! Awful."), ReviewType.NEGATIVE)
        self.assertEqual(keyword_score("(Great)"), 1)

    async def test_zero_score_is_positive_never_neutral(self):
        self.assertEqual(await self._classify("the parcel arrived on tuesday"), ReviewType.POSITIVE)
        self.assertEqual(await self._classify("good but bad"), ReviewType.POSITIVE)
        self.assertEqual(await self._classify(""), ReviewType.POSITIVE)


class ClassifierFactoryTests(unittest.TestCase):
    def test_no_token_falls_back_to_keyword(self):
        classifier = build_sentiment_classifier(Settings(huggingface_token=""))
        self.assertIsInstance(classifier, KeywordSentimentClassifier)

    def test_blank_token_falls_back_to_keyword(self):
        classifier = build_sentiment_classifier(Settings(huggingface_token="   "))
        self.assertIsInstance(classifier, KeywordSentimentClassifier)

    def test_token_selects_remote_classifier(self):
        classifier = build_sentiment_classifier(
            Settings(huggingface_token="hf_abc", sentiment_timeout_seconds=3.5)
        )
        self.assertIsInstance(classifier, HuggingFaceSentimentClassifier)
        self.assertEqual(classifier.name, "huggingface")
