import itertools

import pytest

from leadscout.models import Lead
from leadscout.parsing import lead_from_raw
from leadscout.scoring import (
    ESTABLISHED,
    NEW_BUSINESS,
    OPPORTUNITY_TIERS,
    PRIME_TARGET,
    REPUTATION_FIX,
    STABLE_SMB,
    URGENT,
    opportunity_tier,
    recommend_service,
    score_lead,
)

SITE = "https://risebakery.co.uk"


def make_lead(website="", rating=0.0, review_count=0, mobile_speed_issue=False) -> Lead:
    return Lead(
        name="Rise Bakery",
        address="1 Call Lane, Leeds",
        type="bakery",
        website=website,
        rating=rating,
        review_count=review_count,
        mobile_speed_issue=mobile_speed_issue,
    )


@pytest.mark.parametrize("website", ["", "N/A"])
def test_missing_website_is_build_with_top_weight(website):
    lead = make_lead(website=website, rating=4.9, review_count=500)
    assert recommend_service(lead) == "build"
    assert score_lead(lead) == 45


def test_placeholder_website_still_gets_early_bird_bonus():
    lead = make_lead(website="N/A", rating=4.5, review_count=5)
    assert recommend_service(lead) == "build"
    # 45 no site + 40 early bird, since "N/A" is a non-empty website string
    assert score_lead(lead) == 85
    assert score_lead({"website": "N/A", "rating": 4.5, "reviewCount": 5}) == 85


def test_slow_mobile_site_is_fix():
    lead = make_lead(website=SITE, rating=4.1, review_count=5, mobile_speed_issue=True)
    assert recommend_service(lead) == "fix"
    # 25 slow site + 40 early bird + 15 rating
    assert score_lead(lead) == 80


@pytest.mark.parametrize("rating", [0.0, 3.2, 3.99])
def test_low_or_missing_rating_is_care(rating):
    assert recommend_service(make_lead(website=SITE, rating=rating, review_count=40)) == "care"


def test_healthy_business_is_check():
    lead = make_lead(website=SITE, rating=4.7, review_count=450)
    assert recommend_service(lead) == "check"
    assert score_lead(lead) == 0


def test_no_website_mid_reviews_mid_rating():
    assert score_lead(make_lead(rating=4.0, review_count=50)) == 90


def test_map_listing_website_gets_no_early_bird_bonus():
    lead = make_lead(website="https://maps.google.com/?cid=123", rating=4.8, review_count=3)
    assert score_lead(lead) == 0


@pytest.mark.parametrize("reviews,expected", [(9, 40), (10, 30), (300, 30), (301, 0)])
def test_review_bands(reviews, expected):
    assert score_lead(make_lead(website=SITE, rating=4.8, review_count=reviews)) == expected


@pytest.mark.parametrize("rating,expected", [(0.0, 0), (0.1, 15), (4.2, 15), (4.3, 0)])
def test_rating_band(rating, expected):
    assert score_lead(make_lead(website=SITE, rating=rating, review_count=500)) == expected


def test_score_always_within_bounds():
    websites = ["", "N/A", SITE, "https://google.com/maps/place/x"]
    ratings = [0.0, 1.0, 3.8, 4.2, 4.4, 5.0]
    reviews = [0, 9, 10, 14, 30, 300, 301, 601, 5000]
    for website, rating, count, slow in itertools.product(websites, ratings, reviews, [True, False]):
        score = score_lead(make_lead(website, rating, count, slow))
        assert 0 <= score <= 100


def test_accepts_raw_records():
    raw = {"website": "", "rating": 2.0, "reviewCount": 700}
    assert recommend_service(raw) == "build"
    assert score_lead(raw) == 60
    assert opportunity_tier(raw) == URGENT


@pytest.mark.parametrize("lead,tier", [
    (make_lead(rating=2.0, review_count=700), URGENT),
    (make_lead(website=SITE, rating=4.9, review_count=14), NEW_BUSINESS),
    (make_lead(website=SITE, rating=3.8, review_count=30), PRIME_TARGET),
    (make_lead(website=SITE, rating=4.4, review_count=300), PRIME_TARGET),
    (make_lead(website=SITE, rating=3.5, review_count=100), REPUTATION_FIX),
    (make_lead(website=SITE, rating=3.5, review_count=700), REPUTATION_FIX),
    (make_lead(website=SITE, rating=4.8, review_count=700), ESTABLISHED),
    (make_lead(website=SITE, rating=4.8, review_count=100), STABLE_SMB),
    (make_lead(website=SITE, rating=0.0, review_count=50), STABLE_SMB),
])
def test_opportunity_tier_first_match_wins(lead, tier):
    assert opportunity_tier(lead) == tier


def test_opportunity_tier_is_total():
    for rating, count in itertools.product([0.0, 2.0, 3.8, 4.1, 4.4, 4.9], [0, 14, 15, 30, 300, 601]):
        for website in ["", SITE]:
            assert opportunity_tier(make_lead(website, rating, count)) in OPPORTUNITY_TIERS


def test_raw_records_with_loose_strings():
    raw = {"website": "https://rise.example", "rating": "4.1", "reviewCount": "120+"}
    # 30 reviews band + 15 rating
    assert score_lead(raw) == 45
    assert opportunity_tier(raw) == PRIME_TARGET


@pytest.mark.parametrize("raw", [
    {"name": "A", "address": "B", "website": "https://a.example", "rating": 4.5,
     "reviewCount": 40, "mobile_speed_issue": "false"},
    {"name": "A", "address": "B", "website": "https://a.example", "rating": "3.1",
     "reviewCount": "1,204", "mobile_speed_issue": "true"},
    {"name": "A", "address": "B", "website": "N/A", "rating": "n/a", "reviewCount": "3"},
])
def test_raw_records_agree_with_parsed_leads(raw):
    lead = lead_from_raw(raw, "cafe")
    assert recommend_service(raw) == lead.recommended_service_id
    assert score_lead(raw) == lead.lead_score
    assert opportunity_tier(raw) == opportunity_tier(lead)
