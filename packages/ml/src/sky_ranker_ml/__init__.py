"""Sky Ranker engine: confidence-weighted ranking of flight offers."""

from sky_ranker_ml.collaborators import (
    InMemoryProfileStore,
    InMemoryRouteQualityRepository,
    PreferenceProfileStore,
    RouteQualityRepository,
)
from sky_ranker_ml.engine import RecommendationEngine, RecommendationRequest
from sky_ranker_ml.exceptions import InvalidInput
from sky_ranker_ml.features import CandidateSet, FeatureExtractor, FeatureVector
from sky_ranker_ml.ranker import OfferRanker
from sky_ranker_ml.recommendation import (
    PersonalizationStage,
    RankedOffer,
    Recommendation,
)
from sky_ranker_ml.scoring import OfferScorer, ScoreResult, score

__all__ = [
    "CandidateSet",
    "FeatureExtractor",
    "FeatureVector",
    "InMemoryProfileStore",
    "InMemoryRouteQualityRepository",
    "InvalidInput",
    "OfferRanker",
    "OfferScorer",
    "PersonalizationStage",
    "PreferenceProfileStore",
    "RankedOffer",
    "Recommendation",
    "RecommendationEngine",
    "RecommendationRequest",
    "RouteQualityRepository",
    "ScoreResult",
    "score",
]
