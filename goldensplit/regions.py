"""Search regions around the cut points of a sequence."""

from collections import namedtuple

import dnachisel as dc

Region = namedtuple("Region", ["sequence", "start", "end"])


def _cut_windows(sequence, number_of_fragments, space_around):
    if number_of_fragments < 2:
        raise ValueError("number_of_fragments should be 2 or more, got %d"
                         % number_of_fragments)
    if space_around < 0:
        raise ValueError("space_around should be positive, got %d"
                         % space_around)
    fragment_size = len(sequence) // number_of_fragments
    for i in range(1, number_of_fragments):
        middle = fragment_size * i
        yield middle - space_around, middle + space_around


def check_regions(sequence, regions, kmer_size=4):
    """Raise a ValueError if some regions are out of the sequence bounds,
    shorter than ``kmer_size``, or overlapping with the next region."""
    for region in regions:
        if region.start < 0 or region.end > len(sequence):
            raise ValueError(
                "Region (%d, %d) is out of the sequence bounds (0, %d)."
                % (region.start, region.end, len(sequence)))
        if region.end - region.start < kmer_size:
            raise ValueError(
                "Region (%d, %d) is shorter than the overhangs size (%d)."
                % (region.start, region.end, kmer_size))
    for region, next_region in zip(regions, regions[1:]):
        if region.end > next_region.start:
            raise ValueError(
                "Regions (%d, %d) and (%d, %d) overlap, use a smaller "
                "space_around or fewer fragments." % (
                    region.start, region.end,
                    next_region.start, next_region.end))


def get_regions(sequence, number_of_fragments, space_around, kmer_size=4):
    """Return the regions in which to look for the overhangs.

    The sequence is divided in ``number_of_fragments`` segments of equal
    length and one region of radius ``space_around`` is centered on each of
    the ``number_of_fragments - 1`` boundaries between segments.
    """
    regions = [
        Region(sequence[start:end], start, end)
        for start, end in _cut_windows(sequence, number_of_fragments,
                                       space_around)
    ]
    check_regions(sequence, regions, kmer_size=kmer_size)
    return regions


def _find_problem_inside_window(sequence, start, end, problems, kmer_size):
    for problem_start, problem_end in problems:
        too_short = (problem_end - problem_start - 2) < kmer_size
        if problem_start >= start and problem_end <= end and not too_short:
            return Region(sequence[problem_start + 1: problem_end - 1],
                          problem_start + 1, problem_end - 1)
    return Region(sequence[start:end], start, end)


def get_regions_prioritizing_problems(sequence, number_of_fragments,
                                      space_around, problems, kmer_size=4):
    """Return regions placed preferably on problematic zones.

    This is a variant of ``get_regions``. When one of the ``problems`` (a
    list of ``(start, end)`` locations, see ``find_problems``) lies entirely
    in the window around a cut point, the region is narrowed to this problem
    (minus one nucleotide on each side), so that cutting there will separate
    the problematic pattern in two different fragments.
    """
    problems = [(int(start), int(end)) for (start, end) in problems]
    regions = [
        _find_problem_inside_window(sequence, start, end, problems, kmer_size)
        for start, end in _cut_windows(sequence, number_of_fragments,
                                       space_around)
    ]
    check_regions(sequence, regions, kmer_size=kmer_size)
    return regions


def find_problems(sequence, specifications):
    """Return the (start, end) locations breaching DnaChisel specifications.

    Parameters
    ----------

    sequence
      An ATGC string

    specifications
      A list of DnaChisel specifications such as
      ``[dc.AvoidPattern("BsmBI_site"), dc.AvoidPattern("9xA")]``.
    """
    problem = dc.DnaOptimizationProblem(sequence=sequence,
                                        constraints=list(specifications),
                                        logger=None)
    evaluations = problem.constraints_evaluations()
    return sorted(set(
        (int(location.start), int(location.end))
        for evaluation in evaluations.evaluations
        for location in evaluation.locations
    ))
