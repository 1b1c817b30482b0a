"""Split a random 5kb sequence into 8 fragments with high-fidelity overhangs.

The ligation frequencies are read from a JSON file of the form
``{"ATCG": {"CGAT": 512, ...}, ...}`` given as first argument.
"""
import sys

from goldensplit import (SplitSetSelector, FrequencyTable,
                         add_spacers_to_fragments)
from goldensplit.reports import write_report_for_split
from dnachisel import random_dna_sequence

table = FrequencyTable.from_json_file(sys.argv[1])
sequence = random_dna_sequence(5000, seed=123)
selector = SplitSetSelector(table, max_candidates=10 ** 6)
fragments = selector.split_sequence(sequence, number_of_fragments=8,
                                    space_around=6)
for fragment in fragments:
    print(fragment.start_overhang or "----", len(fragment.sequence),
          fragment.end_overhang or "----")

print("Re-linearized sequence with BsmBI spacers:")
print(add_spacers_to_fragments(fragments, binding_site="CGTCTC", seed=123))

write_report_for_split(fragments, sequence, target="split_report.zip",
                       left_flank="CGTCTCA", right_flank="TGAGACG")
