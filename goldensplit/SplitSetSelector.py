import itertools as itt
from collections import namedtuple

from proglog import default_bar_logger

from .biotools import (memo_reverse_complement, is_palindromic, list_kmers,
                       find_all_occurrences, check_dna_sequence)
from .regions import get_regions, get_regions_prioritizing_problems
from .FrequencyTable import FrequencyTable

Overhang = namedtuple("Overhang", ["sequence", "start", "end"])
Fragment = namedtuple("Fragment",
                      ["start_overhang", "end_overhang", "sequence"])


class Permutation(namedtuple("Permutation",
                             ["overhangs", "matches", "mismatches"])):
    """One choice of overhangs (one per region), with its fidelity scores.

    ``matches`` and ``mismatches`` are zero until the permutation is scored.
    """

    __slots__ = ()

    def __new__(cls, overhangs=(), matches=0, mismatches=0):
        return super(Permutation, cls).__new__(cls, tuple(overhangs),
                                               matches, mismatches)


class NoValidOverhangsError(ValueError):
    """Raised when no set of unique overhangs could be found in the regions.
    """


class OverhangPositionError(RuntimeError):
    """Raised when a selected overhang cannot be located in its region."""


def is_unique_permutation(overhangs):
    """Return True if no overhang is repeated or is the reverse-complement of
    another overhang.

    >>> is_unique_permutation(["AACA", "TGTT"])
    False
    """
    seen = set()
    for overhang in overhangs:
        if overhang in seen:
            return False
        seen.add(overhang)
        seen.add(memo_reverse_complement(overhang))
    return True


class SplitSetSelector:
    """Splitter of a sequence into fragments with high-fidelity overhangs.

    The sequence is divided into fragments of similar sizes. Around each
    cut point, all subsequences of the region are considered as overhangs,
    and the combination of overhangs (one per region) with the best ligation
    fidelity (according to an experimental frequency table) is selected.

    Parameters
    ----------

    frequency_table
      A ``FrequencyTable``, or a dictionnary ``{top: {bottom: count}}``
      giving how often the top-strand overhang was observed ligated with the
      bottom-strand overhang.

    overhangs_size
      Number of nucleotides for the overhangs, e.g. 4 for golden gate assembly.

    max_mismatches
      Maximal mismatches score allowed for the selected permutation. Only
      permutations with as many matches and no more mismatches than the
      current best one can replace it during the selection.

    max_candidates
      Maximal number of candidate permutations explored. The number of
      candidates grows exponentially with the number of fragments, so this
      bounds the computing time. Keep to None to explore all candidates.

    progress_logger
      Either "bar" for a progress bar, None for no logging, or any Proglog
      logger.
    """

    def __init__(self, frequency_table, overhangs_size=4, max_mismatches=100,
                 max_candidates=None, progress_logger='bar'):
        """Initialize the object (see class description)."""
        if not isinstance(frequency_table, FrequencyTable):
            frequency_table = FrequencyTable(frequency_table)
        if overhangs_size < 1:
            raise ValueError("overhangs_size should be positive, got %d"
                             % overhangs_size)
        self.frequency_table = frequency_table
        self.overhangs_size = overhangs_size
        self.max_mismatches = max_mismatches
        self.max_candidates = max_candidates
        self.progress_logger = default_bar_logger(progress_logger,
                                                  min_time_interval=0.2)

    def _iter_unique_products(self, kmers_lists, prefix=()):
        """Yield the unique tuples of the cartesian product of the lists, in
        the same order as ``itertools.product``.

        Branches are abandoned as soon as the prefix is not unique.
        """
        if len(prefix) == len(kmers_lists):
            yield prefix
            return
        for kmer in kmers_lists[len(prefix)]:
            if (kmer in prefix) or (memo_reverse_complement(kmer) in prefix):
                continue
            for product in self._iter_unique_products(kmers_lists,
                                                      prefix + (kmer,)):
                yield product

    def generate_candidates(self, regions):
        """Iterate over the unique permutations of overhangs from the regions.

        Each permutation has one overhang from each region (in the regions'
        order). Permutations where an overhang appears twice, or appears with
        its reverse-complement, are skipped. The permutations are generated
        lazily, and at most ``self.max_candidates`` of them.
        """
        kmers_lists = [list_kmers(region.sequence, self.overhangs_size)
                       for region in regions]
        products = self._iter_unique_products(kmers_lists)
        if self.max_candidates is not None:
            products = itt.islice(products, self.max_candidates)
        for overhangs in products:
            yield Permutation(overhangs)

    def score_permutation(self, permutation):
        """Return the permutation with its matches and mismatches scores.

        All overhangs and their reverse-complements are paired with each
        other. The ligation frequencies of pairs forming a correct
        (non-palindromic) duplex count as matches, and all other pairs count
        as mismatches.
        """
        strands = [
            strand
            for overhang in permutation.overhangs
            for strand in (overhang, memo_reverse_complement(overhang))
        ]
        matches, mismatches = 0, 0
        for top_strand, bottom_strand in itt.product(strands, repeat=2):
            count = self.frequency_table.lookup(top_strand, bottom_strand)
            if ((bottom_strand == memo_reverse_complement(top_strand)) and
                    not is_palindromic(top_strand)):
                matches += count
            else:
                mismatches += count
        return permutation._replace(matches=matches, mismatches=mismatches)

    def select_best_permutation(self, permutations):
        """Return the best of the (scored) permutations.

        Permutations are scanned in order and any permutation with at least
        as many matches and at most as many mismatches as the current best
        replaces it, so ties are won by the last permutation. An empty
        Permutation is returned if no permutation has fewer mismatches than
        ``self.max_mismatches``.
        """
        logger = self.progress_logger
        best = Permutation()
        best_matches, best_mismatches = 0, self.max_mismatches
        for permutation in logger.iter_bar(candidate=permutations):
            if ((permutation.matches >= best_matches) and
                    (permutation.mismatches <= best_mismatches)):
                best = permutation
                best_matches = permutation.matches
                best_mismatches = permutation.mismatches
                logger(message="New best overhangs: %s (%d matches, "
                               "%d mismatches)" % (" ".join(best.overhangs),
                                                   best_matches,
                                                   best_mismatches))
        return best

    def find_best_overhangs(self, regions):
        """Return the best-scoring Permutation of overhangs for the regions.

        Raises a NoValidOverhangsError if no permutation was found.
        """
        scored_permutations = (
            self.score_permutation(permutation)
            for permutation in self.generate_candidates(regions)
        )
        best = self.select_best_permutation(scored_permutations)
        if len(best.overhangs) == 0:
            raise NoValidOverhangsError(
                "No valid overhang set found in the %d regions (with at most"
                " %s mismatches)." % (len(regions), self.max_mismatches))
        return best

    def find_positions(self, regions, permutation):
        """Return the list of all Overhang occurrences in their regions."""
        return [
            Overhang(overhang, region.start + start, region.start + end)
            for region, overhang in zip(regions, permutation.overhangs)
            for (start, end) in find_all_occurrences(overhang,
                                                     region.sequence)
        ]

    def get_fragments(self, sequence, permutation, positions):
        """Cut the sequence at the first position of each overhang.

        Consecutive fragments overlap by one overhang, which is the end
        overhang of the first fragment and the start overhang of the next.
        """
        fragments = []
        start_point = 0
        last_overhang = ""
        for overhang in permutation.overhangs:
            position = next((p for p in positions if p.sequence == overhang),
                            None)
            if position is None:
                raise OverhangPositionError(
                    "Overhang %s could not be located in its region."
                    % overhang)
            fragments.append(Fragment(last_overhang, overhang,
                                      sequence[start_point:position.end]))
            start_point = position.start
            last_overhang = overhang
        fragments.append(Fragment(last_overhang, "", sequence[start_point:]))
        return fragments

    def split_sequence(self, sequence, number_of_fragments, space_around,
                       problems=None):
        """Split the sequence into fragments with compatible overhangs.

        Parameters
        ----------

        sequence
          An ATGC string or a Biopython record.

        number_of_fragments
          Number of fragments to cut the sequence into (2 or more).

        space_around
          Radius of the region around each cut point in which the overhangs
          are searched. The regions must fit in the sequence, must not
          overlap, and must be at least as long as the overhangs.

        problems
          Optional list of ``(start, end)`` locations of problematic zones (see
          ``find_problems``). A region containing a problem is narrowed to
          that problem, so the cut separates the problematic pattern.

        Returns
        -------

        fragments
          A list of Fragments, with attributes ``start_overhang``,
          ``end_overhang`` and ``sequence``.
        """
        sequence = check_dna_sequence(sequence)
        if problems is None:
            regions = get_regions(sequence, number_of_fragments,
                                  space_around, self.overhangs_size)
        else:
            regions = get_regions_prioritizing_problems(
                sequence, number_of_fragments, space_around, problems,
                self.overhangs_size)
        self.progress_logger(message="Searching overhangs in %d regions"
                                     % len(regions))
        permutation = self.find_best_overhangs(regions)
        positions = self.find_positions(regions, permutation)
        return self.get_fragments(sequence, permutation, positions)


def split_sequence(sequence, number_of_fragments, space_around,
                   frequency_table, problems=None, **selector_params):
    """Split the sequence into fragments with compatible overhangs.

    Shorthand for ``SplitSetSelector(frequency_table, **selector_params)
    .split_sequence(sequence, number_of_fragments, space_around, problems)``.
    """
    selector = SplitSetSelector(frequency_table, **selector_params)
    return selector.split_sequence(sequence, number_of_fragments,
                                   space_around, problems=problems)


def assemble_fragments(fragments):
    """Return the sequence obtained by ligating the fragments together.

    Each fragment must start with the end overhang of the previous fragment,
    and this overlap is counted only once.
    """
    sequence = ""
    for i, fragment in enumerate(fragments):
        if i == 0:
            sequence = fragment.sequence
            continue
        overhang = fragment.start_overhang
        if (overhang != fragments[i - 1].end_overhang or
                not fragment.sequence.startswith(overhang) or
                not sequence.endswith(overhang)):
            raise ValueError("Fragments %d and %d do not share an overhang"
                             % (i - 1, i))
        sequence += fragment.sequence[len(overhang):]
    return sequence
