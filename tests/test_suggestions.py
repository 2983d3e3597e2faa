import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config import MatchingPolicy  # noqa: E402
from app.features.suggestions import is_instructional, sanitize_suggestions  # noqa: E402


RESUME = "Experienced software engineer with Python and React skills. Designed scalable backend systems."
SUMMARY_RESUME = "Professional Summary\n" + "Backend engineer building reliable payment services. " * 5
LONG_RESUME_NO_SUMMARY_HEADING = (
    "Seasoned backend engineer focused on payments. " * 4
    + "Experience\n"
    + "Built ledger services for banks. " * 7
)
POLICY = MatchingPolicy()


def _texts(suggestions):
    return [(item.category, item.text) for item in suggestions]


class SuggestionSanitizerTests(unittest.TestCase):
    def test_clean_skill_is_unchanged_except_for_id(self):
        result = sanitize_suggestions([{"id": "42", "category": "Skills", "text": "Terraform"}], RESUME, POLICY)
        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].id, "1")
        self.assertEqual(result[0].category, "Skills")
        self.assertEqual(result[0].text, "Terraform")

    def test_plain_skill_loses_wrapping_quotes(self):
        result = sanitize_suggestions([{"id": "1", "category": "Skills", "text": "'Kubernetes'"}], RESUME, POLICY)
        self.assertEqual(_texts(result), [("Skills", "Kubernetes")])

    def test_instructional_skill_with_quotes_is_split(self):
        raw = [{"id": "1", "category": "Skills", "text": "Add the following skills: 'OAuth', 'OpenID Connect'"}]
        result = sanitize_suggestions(raw, RESUME, POLICY)
        self.assertEqual(_texts(result), [("Skills", "OAuth"), ("Skills", "OpenID Connect")])
        self.assertEqual([item.id for item in result], ["1", "2"])

    def test_instructional_skill_without_quotes_uses_text_after_last_colon(self):
        raw = [{"id": "1", "category": "Skills", "text": "Consider adding these skills: Terraform, Helm, ArgoCD"}]
        result = sanitize_suggestions(raw, RESUME, POLICY)
        self.assertEqual([item.text for item in result], ["Terraform", "Helm", "ArgoCD"])

    def test_instructional_skill_without_extractable_names_is_dropped(self):
        raw = [{"id": "1", "category": "Skills", "text": "You should include more cloud tooling"}]
        self.assertEqual(sanitize_suggestions(raw, RESUME, POLICY), [])

    def test_non_skill_phrases_are_dropped(self):
        raw = [
            {"id": "1", "category": "Skills", "text": "Root Cause Analysis"},
            {"id": "2", "category": "Skills", "text": "Add: Terraform, technical documentation"},
        ]
        self.assertEqual(sanitize_suggestions(raw, RESUME, POLICY), [])

    def test_skills_are_deduplicated_by_normalized_text(self):
        raw = [
            {"id": "1", "category": "Skills", "text": "Docker"},
            {"id": "2", "category": "Skills", "text": "docker"},
            {"id": "3", "category": "Skills", "text": "Include: 'Docker', 'Helm'"},
        ]
        result = sanitize_suggestions(raw, RESUME, POLICY)
        self.assertEqual([item.text for item in result], ["Docker", "Helm"])

    def test_experience_recovers_quoted_bullet(self):
        raw = [
            {
                "id": "1",
                "category": "Experience",
                "text": (
                    "Add a bullet point such as: 'Architected a distributed microservices platform "
                    "using Kubernetes and Kafka'"
                ),
            }
        ]
        result = sanitize_suggestions(raw, RESUME, POLICY)
        self.assertEqual(
            _texts(result),
            [("Experience", "Architected a distributed microservices platform using Kubernetes and Kafka")],
        )

    def test_experience_recovers_text_after_colon(self):
        raw = [
            {
                "id": "1",
                "category": "Experience",
                "text": "You should write: Led migration of 40 services to Kubernetes with zero downtime",
            }
        ]
        result = sanitize_suggestions(raw, RESUME, POLICY)
        self.assertEqual(
            _texts(result),
            [("Experience", "Led migration of 40 services to Kubernetes with zero downtime")],
        )

    def test_experience_without_pastable_content_is_dropped(self):
        raw = [
            {"id": "1", "category": "Experience", "text": "Consider highlighting your leadership experience"},
            {"id": "2", "category": "Summary", "text": "This bullet: too short"},
        ]
        self.assertEqual(sanitize_suggestions(raw, RESUME, POLICY), [])

    def test_experience_overlapping_resume_is_dropped(self):
        resume = (
            "Designed and developed scalable backend systems using Python and Kotlin, "
            "resulting in high-availability systems."
        )
        raw = [
            {
                "id": "1",
                "category": "Experience",
                "text": (
                    "Designed and developed scalable backend systems using Python and Kotlin, "
                    "resulting in improved performance."
                ),
            }
        ]
        self.assertEqual(sanitize_suggestions(raw, resume, POLICY), [])

    def test_summary_dropped_when_resume_mentions_summary(self):
        raw = [
            {
                "id": "1",
                "category": "Summary",
                "text": "Results-driven engineer with a decade of experience shipping cloud platforms.",
            }
        ]
        self.assertEqual(sanitize_suggestions(raw, SUMMARY_RESUME, POLICY), [])
        self.assertEqual(len(sanitize_suggestions(raw, RESUME, POLICY)), 1)

    def test_summary_dropped_for_long_resume_with_late_experience_heading(self):
        self.assertNotIn("summary", LONG_RESUME_NO_SUMMARY_HEADING.lower())
        raw = [
            {
                "id": "1",
                "category": "Summary",
                "text": "Results-driven engineer with a decade of experience shipping cloud platforms.",
            }
        ]
        self.assertEqual(sanitize_suggestions(raw, LONG_RESUME_NO_SUMMARY_HEADING, POLICY), [])

    def test_education_is_kept_and_ids_are_renumbered(self):
        raw = [
            {"id": "7", "category": "Education", "text": "B.S. in Computer Science"},
            {"id": "x", "category": "Skills", "text": "Terraform"},
            {"id": 3, "category": "Experience", "text": "Cut infrastructure spend by 18% through rightsizing"},
        ]
        result = sanitize_suggestions(raw, RESUME, POLICY)
        self.assertEqual([item.id for item in result], ["1", "2", "3"])
        self.assertEqual(
            _texts(result),
            [
                ("Education", "B.S. in Computer Science"),
                ("Skills", "Terraform"),
                ("Experience", "Cut infrastructure spend by 18% through rightsizing"),
            ],
        )

    def test_structurally_invalid_rows_are_dropped(self):
        raw = [
            "Docker",
            None,
            {"category": "Skills", "text": "Docker"},
            {"id": True, "category": "Skills", "text": "Docker"},
            {"id": "1", "category": "Projects", "text": "Docker"},
            {"id": "2", "category": "skills", "text": "Docker"},
            {"id": "3", "category": "Skills", "text": 5},
            {"id": "4", "category": "Skills", "text": "   "},
        ]
        self.assertEqual(sanitize_suggestions(raw, RESUME, POLICY), [])

    def test_non_list_input_yields_empty(self):
        self.assertEqual(sanitize_suggestions(None, RESUME, POLICY), [])
        self.assertEqual(sanitize_suggestions({"id": "1"}, RESUME, POLICY), [])

    def test_instructional_prefix_detection(self):
        self.assertTrue(is_instructional("  ADD Docker"))
        self.assertTrue(is_instructional("You could mention Kafka"))
        self.assertTrue(is_instructional("this bullet shows impact"))
        self.assertFalse(is_instructional("Addressed outages within SLA"))
        self.assertFalse(is_instructional("Included in on-call rotation"))


if __name__ == "__main__":
    unittest.main()
