"""Cut a sequence preferably across its BsmBI site.

Regions containing a BsmBI site are narrowed to the site, so that the cut
separates the site in two fragments.
"""
import sys

from goldensplit import SplitSetSelector, FrequencyTable, find_problems
from dnachisel import AvoidPattern, random_dna_sequence

table = FrequencyTable.from_json_file(sys.argv[1])
sequence = (random_dna_sequence(995, seed=1) + "CGTCTC" +
            random_dna_sequence(999, seed=2))
problems = find_problems(sequence, [AvoidPattern("BsmBI_site")])
print("problems:", problems)

selector = SplitSetSelector(table)
fragments = selector.split_sequence(sequence, number_of_fragments=2,
                                    space_around=20, problems=problems)
print([(f.start_overhang, f.end_overhang) for f in fragments])
