import pytest
from fastapi.testclient import TestClient

from portfolio_interview.main import app
from portfolio_interview.services import scoring


client = TestClient(app)


def test_criteria_add_up_to_100():
	criteria = scoring.criteria()
	assert criteria.max_total == 100
	for category in criteria.categories:
		assert sum(i.points for i in category.items) == category.max_score


def test_empty_checklist_scores_zero():
	result = scoring.score([])
	assert result.total == 0
	assert result.categories == {"Preparation": 0, "Interview answers": 0, "Attitude": 0}
	assert result.feedback.startswith("More preparation needed")


def test_full_checklist_scores_100():
	result = scoring.score(scoring.item_ids())
	assert result.total == 100
	assert result.feedback.startswith("Excellent")


@pytest.mark.parametrize(
	"score, prefix",
	[(90, "Excellent"), (89, "Strong"), (80, "Strong"), (75, "Good"), (60, "Average"), (59, "More preparation")],
)
def test_feedback_bands(score, prefix):
	assert scoring.feedback_for(score).startswith(prefix)


def test_unknown_items_are_rejected():
	with pytest.raises(ValueError, match="bogus"):
		scoring.score(["self_intro", "bogus"])


def test_score_endpoint():
	res = client.post("/api/score", json={"checkedItems": ["core_questions", "common_questions", "answer_style"]})
	assert res.status_code == 200
	body = res.json()
	assert body["total"] == 55
	assert body["categories"]["Interview answers"] == 40
	assert body["maxTotal"] == 100


def test_score_endpoint_rejects_unknown_items():
	assert client.post("/api/score", json={"checkedItems": ["nope"]}).status_code == 400


def test_criteria_endpoint():
	body = client.get("/api/score/criteria").json()
	assert [c["name"] for c in body["categories"]] == ["Preparation", "Interview answers", "Attitude"]
