import re
from copy import deepcopy
from functools import lru_cache
from Bio.SeqFeature import FeatureLocation, SeqFeature
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord


complements = {"A": "T", "T": "A", "C": "G", "G": "C"}
def reverse_complement(sequence):
    """Return the reverse-complement of the DNA sequence.
    For instance ``complement("ATGC")`` returns ``"GCAT"``.

    The sequence must be an ATGC string.
    """
    return "".join([complements[c] for c in sequence[::-1]])

@lru_cache(maxsize=4096)
def memo_reverse_complement(sequence):
    return reverse_complement(sequence)

def is_palindromic(sequence):
    """Return True if the sequence is its own reverse-complement (e.g. AATT).
    """
    return sequence == memo_reverse_complement(sequence)


def check_dna_sequence(sequence):
    """Return the upper-case ATGC string of a string or Biopython record.

    Raises a ValueError if the sequence contains anything else than ATGC.
    """
    if hasattr(sequence, "seq"):
        sequence = str(sequence.seq)
    sequence = str(sequence).upper()
    invalid = set(sequence).difference(complements)
    if len(invalid):
        raise ValueError("Sequence contains non-ATGC characters: %s"
                         % ", ".join(sorted(invalid)))
    return sequence


def list_kmers(sequence, kmer_size=4):
    """Return the distinct subsequences of size ``kmer_size`` of the sequence,
    in order of first occurrence.

    >>> list_kmers("AAAAT")
    ['AAAA', 'AAAT']
    """
    kmers = (sequence[i: i + kmer_size]
             for i in range(len(sequence) - kmer_size + 1))
    return list(dict.fromkeys(kmers))


def find_all_occurrences(subsequence, sequence):
    """Return the (start, end) of every occurrence of ``subsequence``.

    Occurrences are found left to right and do not overlap, so "AAAA" is
    found once in "AAAAAA".
    """
    return [
        match.span()
        for match in re.finditer(re.escape(subsequence), sequence)
    ]


def crop_record(record, crop_start, crop_end, features_suffix=" (part)"):
    """Return the cropped record with possibly cropped features.

    Note that this differs from ``record[start:end]`` in that in the latter
    expression, cropped features are discarded.

    Parameters
    ----------

    record
      A Biopython record

    crop_start, crop_end
      Start and end of the segment to be cropped.

    features_suffix
      All cropped features will have their label appended with this suffix.
    """
    features = []
    for feature in record.features:
        start, end = sorted([feature.location.start, feature.location.end])
        new_start, new_end = max(start, crop_start), min(end, crop_end)
        if new_end <= new_start:
            continue
        new_start, new_end = new_start - crop_start, new_end - crop_start

        feature = deepcopy(feature)
        feature.location = FeatureLocation(new_start, new_end,
                                           feature.location.strand)
        label = "".join(feature.qualifiers.get("label", ""))
        if new_start > 0 or new_end < crop_end - crop_start:
            label += features_suffix
        feature.qualifiers["label"] = label
        features.append(feature)

    new_record = record[crop_start: crop_end]
    new_record.features = features
    new_record.annotations = dict(record.annotations)
    return new_record


def annotate_record(seqrecord, location="full", feature_type="misc_feature",
                    margin=0, **qualifiers):
    """Add a feature to a Biopython SeqRecord.

    Parameters
    ----------

    seqrecord
      The biopython seqrecord to be annotated.

    location
      Either (start, end) or (start, end, strand). (strand defaults to +1)

    feature_type
      The type associated with the feature

    margin
      Number of extra bases added on each side of the given location.

    qualifiers
      Dictionnary that will be the Biopython feature's `qualifiers` attribute.
    """
    if location == "full":
        location = (margin, len(seqrecord)-margin)

    strand = location[2] if len(location) == 3 else 1
    seqrecord.features.append(
        SeqFeature(
            FeatureLocation(location[0], location[1], strand),
            qualifiers=qualifiers,
            type=feature_type
        )
    )

def sequence_to_biopython_record(sequence, id='<unknown id>',
                                 name='unknown', features=()):
    return SeqRecord(Seq(sequence), id=id, name=name,
                     features=list(features),
                     annotations={"molecule_type": "DNA"})
