"""Random spacers to re-join the fragments of a split sequence.

A spacer carries a Type IIS binding site on each side (in opposite
orientations) so that the digestion of the re-linearized sequence releases
the fragments with their overhangs.
"""

import numpy as np
import dnachisel as dc

from .biotools import reverse_complement


def _has_repeats(sequence, kmer_size):
    problem = dc.DnaOptimizationProblem(
        sequence=sequence, constraints=[dc.UniquifyAllKmers(kmer_size)],
        logger=None)
    return not problem.all_constraints_pass()


def synthesize_spacer(binding_site="CGTCTC", seed=None, inner_size=10,
                      repeats_kmer_size=8, max_attempts=1000):
    """Return a random spacer ``N + rc(site) + N*inner_size + site + N``.

    New random spacers are drawn until one has no repeated subsequence of size
    ``repeats_kmer_size``.

    Parameters
    ----------

    binding_site
      Binding site of the enzyme, e.g. "CGTCTC" for BsmBI.

    seed
      Seed of the random generator, for reproducible spacers.

    inner_size
      Number of random nucleotides between the two binding sites.

    repeats_kmer_size
      Size of the subsequences which must not be repeated in the spacer.

    max_attempts
      Number of spacers drawn before giving up with a ValueError.
    """
    rng = np.random.RandomState(seed)

    def random_part(length):
        return dc.random_dna_sequence(length,
                                      seed=int(rng.randint(0, 2 ** 31 - 1)))

    for _ in range(max_attempts):
        spacer = (random_part(1) + reverse_complement(binding_site) +
                  random_part(inner_size) + binding_site + random_part(1))
        if not _has_repeats(spacer, repeats_kmer_size):
            return spacer
    raise ValueError("No spacer without %d-mer repeats found in %d attempts"
                     % (repeats_kmer_size, max_attempts))


def add_spacers_to_fragments(fragments, binding_site="CGTCTC", seed=None,
                             **spacer_params):
    """Return a sequence with all fragments joined by random spacers.

    Parameters
    ----------

    fragments
      A list of Fragments (as returned by ``SplitSetSelector.split_sequence``)

    binding_site
      Binding site of the enzyme used to release the fragments.

    seed
      Seed for the random generation of the spacers.

    spacer_params
      Other parameters passed to ``synthesize_spacer``.
    """
    rng = np.random.RandomState(seed)
    sequence = ""
    for i, fragment in enumerate(fragments):
        if i > 0:
            sequence += synthesize_spacer(
                binding_site, seed=int(rng.randint(0, 2 ** 31 - 1)),
                **spacer_params)
        sequence += fragment.sequence
    return sequence
