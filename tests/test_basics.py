"""
Basic tests to check that the core functionalities are at least running.
"""
import itertools
import pytest
from goldensplit import (SplitSetSelector, Permutation, Region, Fragment,
                         NoValidOverhangsError, OverhangPositionError,
                         is_unique_permutation, split_sequence,
                         assemble_fragments, get_regions, list_kmers,
                         reverse_complement, is_palindromic)
from dnachisel import random_dna_sequence

SEQUENCE = (
    "TGGTACGAAAATTAGGGGATCTACCTAGAAAGCCACAAGGCGATAGGTCAAGCTTAAAGAACCCTTAC"
    "ATGGATCTTACAGATTCTGAAAGTAAAGAAACAACAGAGGTTAAACAAACAGAACCAAAAAGAAAAAAA"
    "GCATTGTTGAAAACAATGAAAGTTGATGTTTCAATCCATAATAAGATTAAATCGCTGCACGAAATTCTG"
    "GCAGCATCCGAAGGAAAAAAAAAAAAAAAAAAAAAAAAAAA"
)


@pytest.fixture
def selector(frequency_table):
    return SplitSetSelector(frequency_table, progress_logger=None)


def regions_from_strings(strings):
    return [Region(s, 0, len(s)) for s in strings]


def test_biotools():
    assert reverse_complement("ATGC") == "GCAT"
    assert is_palindromic("AATT")
    assert not is_palindromic("AACA")
    assert list_kmers("AAAAT") == ["AAAA", "AAAT"]
    assert list_kmers("AAA") == []


def test_is_unique_permutation():
    assert not is_unique_permutation(["AACA", "TGTT"])
    assert not is_unique_permutation(["AAAA", "TTTT", "CCCC"])
    assert not is_unique_permutation(["AATT", "AATT"])
    assert is_unique_permutation(["AAAT", "TTTT", "CCCC"])
    assert is_unique_permutation(["AATT", "CCCC"])


def test_generate_candidates(selector):
    regions = regions_from_strings(["AAAAT", "TTTT", "CCCC"])
    candidates = list(selector.generate_candidates(regions))
    # AAAA is the reverse complement of TTTT
    assert [c.overhangs for c in candidates] == [("AAAT", "TTTT", "CCCC")]
    assert all((c.matches, c.mismatches) == (0, 0) for c in candidates)

    regions = regions_from_strings(["AACAG", "TGTTC"])
    candidates = list(selector.generate_candidates(regions))
    assert [c.overhangs for c in candidates] == [
        ("AACA", "GTTC"), ("ACAG", "TGTT"), ("ACAG", "GTTC")
    ]


def test_generate_candidates_same_as_filtered_product(selector):
    sequence = random_dna_sequence(60, seed=123)
    regions = regions_from_strings([sequence[:10], sequence[25:33],
                                    sequence[50:]])
    expected = [
        product for product in itertools.product(
            *[list_kmers(region.sequence) for region in regions])
        if is_unique_permutation(product)
    ]
    candidates = [c.overhangs for c in selector.generate_candidates(regions)]
    assert candidates == expected
    for overhangs in candidates:
        for o1, o2 in itertools.combinations(overhangs, 2):
            assert o1 != o2
            assert o1 != reverse_complement(o2)


def test_generate_candidates_max_candidates(frequency_table):
    selector = SplitSetSelector(frequency_table, max_candidates=2,
                                progress_logger=None)
    regions = regions_from_strings(["AACAG", "TGTTC"])
    candidates = list(selector.generate_candidates(regions))
    assert len(candidates) == 2


def test_score_permutation():
    selector = SplitSetSelector({"ATCG": {"ATCG": 3, "CGAT": 10},
                                 "CGAT": {"ATCG": 12},
                                 "AATT": {"AATT": 50}},
                                progress_logger=None)
    scored = selector.score_permutation(Permutation(["ATCG"]))
    assert (scored.matches, scored.mismatches) == (22, 3)
    assert scored.overhangs == ("ATCG",)

    # palindromic self-pairs are always mismatches
    scored = selector.score_permutation(Permutation(["AATT"]))
    assert (scored.matches, scored.mismatches) == (0, 200)

    scored = selector.score_permutation(Permutation(["GGGA"]))
    assert (scored.matches, scored.mismatches) == (0, 0)


def test_score_does_not_depend_on_order(selector):
    overhangs = ["AACA", "GTTC", "ACGA", "CCTA"]
    scores = set()
    for permutation in itertools.permutations(overhangs):
        scored = selector.score_permutation(Permutation(permutation))
        scores.add((scored.matches, scored.mismatches))
    assert len(scores) == 1


def test_select_best_permutation_last_equal_wins(selector):
    permutations = [
        Permutation(["AAAC"], 5, 10),
        Permutation(["AAAG"], 5, 10),
        Permutation(["AAAT"], 4, 0),
        Permutation(["ACAC"], 6, 101),
    ]
    best = selector.select_best_permutation(permutations)
    assert best.overhangs == ("AAAG",)
    assert best == selector.select_best_permutation(permutations)


def test_select_best_permutation_empty(selector):
    assert selector.select_best_permutation([]) == Permutation()
    too_many_mismatches = [Permutation(["AAAC"], 5, 101)]
    assert selector.select_best_permutation(too_many_mismatches) == \
        Permutation()


def test_find_best_overhangs_no_solution(selector):
    regions = regions_from_strings(["AAAA", "TTTT"])
    with pytest.raises(NoValidOverhangsError):
        selector.find_best_overhangs(regions)


def test_find_positions(selector):
    regions = [Region("AAAAAAAATG", 10, 20), Region("CCGGACGGAC", 30, 40)]
    positions = selector.find_positions(regions,
                                        Permutation(["AAAA", "GGAC"]))
    assert [tuple(p) for p in positions] == [
        ("AAAA", 10, 14), ("AAAA", 14, 18), ("GGAC", 32, 36),
        ("GGAC", 36, 40)
    ]


def test_get_fragments(selector):
    sequence = "TTTTT" + "ACCT" + "TTTTT" + "GGAC" + "TTTTT"
    regions = [Region(sequence[3:11], 3, 11), Region(sequence[12:20], 12, 20)]
    permutation = Permutation(["ACCT", "GGAC"])
    positions = selector.find_positions(regions, permutation)
    fragments = selector.get_fragments(sequence, permutation, positions)
    assert fragments == [
        Fragment("", "ACCT", "TTTTTACCT"),
        Fragment("ACCT", "GGAC", "ACCTTTTTTGGAC"),
        Fragment("GGAC", "", "GGACTTTTT"),
    ]
    assert assemble_fragments(fragments) == sequence


def test_get_fragments_missing_overhang(selector):
    with pytest.raises(OverhangPositionError):
        selector.get_fragments("ATGCATGC", Permutation(["ACCT"]), [])


def test_split_sequence(selector):
    fragments = selector.split_sequence(SEQUENCE, number_of_fragments=3,
                                        space_around=25)
    assert len(fragments) == 3
    assert fragments[0].start_overhang == ""
    assert fragments[-1].end_overhang == ""
    for fragment, next_fragment in zip(fragments, fragments[1:]):
        assert fragment.end_overhang == next_fragment.start_overhang
        assert fragment.sequence.endswith(fragment.end_overhang)
        assert next_fragment.sequence.startswith(fragment.end_overhang)
    assert assemble_fragments(fragments) == SEQUENCE

    # The overhangs are those of the best-scoring pair of k-mers
    regions = get_regions(SEQUENCE, 3, 25)
    best, best_matches, best_mismatches = None, 0, 100
    for overhangs in itertools.product(*[list_kmers(r.sequence)
                                         for r in regions]):
        if not is_unique_permutation(overhangs):
            continue
        scored = selector.score_permutation(Permutation(overhangs))
        if (scored.matches >= best_matches and
                scored.mismatches <= best_mismatches):
            best = overhangs
            best_matches, best_mismatches = scored.matches, scored.mismatches
    assert (fragments[0].end_overhang, fragments[1].end_overhang) == best


def test_split_sequence_record_and_lowercase(frequency_table):
    from goldensplit.biotools import sequence_to_biopython_record
    record = sequence_to_biopython_record(SEQUENCE)
    fragments_1 = split_sequence(record, 3, 25, frequency_table,
                                 progress_logger=None)
    fragments_2 = split_sequence(SEQUENCE.lower(), 3, 25, frequency_table,
                                 progress_logger=None)
    assert fragments_1 == fragments_2


def test_split_sequence_many_fragments(frequency_table):
    sequence = random_dna_sequence(1000, seed=123)
    selector = SplitSetSelector(frequency_table, progress_logger=None)
    fragments = selector.split_sequence(sequence, number_of_fragments=5,
                                        space_around=4)
    assert len(fragments) == 5
    overhangs = [f.end_overhang for f in fragments[:-1]]
    assert is_unique_permutation(overhangs)
    assert assemble_fragments(fragments) == sequence


def test_split_sequence_with_problems(selector):
    sequence = (random_dna_sequence(98, seed=1) + "CGTCTC" +
                random_dna_sequence(96, seed=2))
    fragments = selector.split_sequence(sequence, 2, 25,
                                        problems=[(98, 104)])
    assert fragments[0].end_overhang == "GTCT"
    assert fragments[0].sequence == sequence[:103]
    assert fragments[1].sequence == sequence[99:]


def test_split_sequence_invalid_parameters(selector):
    with pytest.raises(ValueError):
        selector.split_sequence(SEQUENCE, 3, 0)
    with pytest.raises(ValueError):
        selector.split_sequence(SEQUENCE, 1, 25)
    with pytest.raises(ValueError):
        selector.split_sequence(SEQUENCE, 3, 100)
    with pytest.raises(ValueError):
        selector.split_sequence("ATGCNNATGC" * 10, 2, 10)


def test_assemble_fragments_mismatch():
    fragments = [Fragment("", "ACCT", "TTACCT"), Fragment("GGAC", "", "GGAC")]
    with pytest.raises(ValueError):
        assemble_fragments(fragments)
