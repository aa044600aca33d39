"""
학점 합산 / 진행률 계산 테스트
"""
import itertools
import pytest
from models import Subject, PriorInstitutionSubject, CertificateCredit, SelfStudyCredit
from services.credit_aggregator import (
    aggregate_credits,
    count_practicum,
    progress_percent,
    resolve_assigned_subjects,
)


def _subject(id, category='전공', credits=3, subject_type=None):
    return Subject(id=id, category=category, name=f"과목{id}", credits=credits,
                   type='이론', subject_type=subject_type)


def _prior(category='전공', credits=3):
    return PriorInstitutionSubject(category=category, name='전적대 과목', credits=credits)


def _self_study(credit_type, credits=4, stage=2):
    return SelfStudyCredit(stage=stage, subject_name='독학사 과목', credits=credits,
                           credit_type=credit_type)


def _cert(credits):
    return CertificateCredit(name='자격증', credits=credits)


class TestAggregateCredits:

    def test_major_sum_from_all_sources(self):
        """배정 20 + 전적대 3 + 독학사(전공) 4 = 27"""
        assigned = [_subject(1, credits=10), _subject(2, credits=10)]
        totals = aggregate_credits(assigned, [_prior(credits=3)], [], [_self_study('전공', 4)])

        assert totals.by_category['전공'] == 27
        assert totals.self_study_total == 4
        assert totals.cert_total == 0
        assert totals.grand_total == 27

    def test_certificates_only_count_toward_grand_total(self):
        totals = aggregate_credits([_subject(1, '교양', 3)], [], [_cert(6), _cert(10)], [])

        assert totals.cert_total == 16
        assert totals.by_category == {'전공': 0, '교양': 3, '일반': 0}
        assert totals.grand_total == 19

    def test_self_study_credit_type_selects_category(self):
        totals = aggregate_credits([], [], [], [
            _self_study('교양', 4, stage=1),
            _self_study('일반', 4),
            _self_study('전공', 4),
        ])

        assert totals.by_category == {'전공': 4, '교양': 4, '일반': 4}
        assert totals.self_study_total == 12

    def test_empty_sources(self):
        totals = aggregate_credits([], [], [], [])

        assert totals.grand_total == 0
        assert totals.by_category == {'전공': 0, '교양': 0, '일반': 0}

    def test_order_independent(self):
        assigned = [_subject(1, '전공', 3), _subject(2, '교양', 2), _subject(3, '일반', 4)]
        prior = [_prior('전공', 3), _prior('일반', 5)]
        certs = [_cert(6), _cert(2)]
        self_study = [_self_study('전공', 4), _self_study('교양', 4, stage=1)]

        expected = aggregate_credits(assigned, prior, certs, self_study)
        for a, p, c, s in itertools.product(
            itertools.permutations(assigned),
            itertools.permutations(prior),
            itertools.permutations(certs),
            itertools.permutations(self_study),
        ):
            result = aggregate_credits(list(a), list(p), list(c), list(s))
            assert result == expected
            assert result.grand_total == expected.grand_total


class TestResolveAssignedSubjects:

    def test_skips_unknown_ids(self, capsys):
        subjects = [_subject(1), _subject(2)]
        resolved = resolve_assigned_subjects({0: [1, 99], 1: [2]}, subjects)

        assert [s.id for s in resolved] == [1, 2]
        assert '99' in capsys.readouterr().out


class TestCountPracticum:

    def test_prior_major_counts_as_elective(self):
        assigned = [
            _subject(1, subject_type='필수'),
            _subject(2, subject_type='필수'),
            _subject(3, subject_type='선택'),
            _subject(4, subject_type=None),
        ]
        count = count_practicum(assigned, [_prior('전공'), _prior('교양')])

        assert count.required == 2
        assert count.elective == 2


class TestProgressPercent:

    @pytest.mark.parametrize('earned,target,expected', [
        (90, 51, 100),
        (0, 51, 0),
        (20, 80, 25),
        (1, 8, 13),       # 12.5 → 13
        (1, 3, 33),
        (2, 3, 67),
        (51, 51, 100),
    ])
    def test_rounding_and_cap(self, earned, target, expected):
        assert progress_percent(earned, target) == expected

    def test_zero_target_is_complete(self):
        assert progress_percent(0, 0) == 100
