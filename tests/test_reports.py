import os
import matplotlib
matplotlib.use("Agg")

from goldensplit.reports import (write_report_for_split, fragments_locations,
                                 overhangs_locations)
from goldensplit.biotools import sequence_to_biopython_record
from goldensplit import SplitSetSelector, Fragment
from dnachisel import random_dna_sequence


def test_fragments_locations():
    fragments = [
        Fragment("", "ACCT", "TTTTTACCT"),
        Fragment("ACCT", "GGAC", "ACCTTTTTTGGAC"),
        Fragment("GGAC", "", "GGACTTTTT"),
    ]
    assert fragments_locations(fragments) == [(0, 9), (5, 18), (14, 23)]
    assert overhangs_locations(fragments) == [("ACCT", 5), ("GGAC", 14)]


def test_split_with_report(frequency_table, tmpdir):
    seq = random_dna_sequence(2000, seed=123)
    record = sequence_to_biopython_record(seq)
    selector = SplitSetSelector(frequency_table, progress_logger=None)
    fragments = selector.split_sequence(record, number_of_fragments=6,
                                        space_around=5)
    zip_data = write_report_for_split(
        fragments=fragments, sequence=record, target="@memory",
        left_flank="CGTCTCA", right_flank="TGAGACG")
    assert len(zip_data) > 0

    target = os.path.join(str(tmpdir), "report")
    write_report_for_split(fragments=fragments, sequence=seq, target=target)
    assert os.path.exists(os.path.join(target, "final_sequence.gb"))
    assert os.path.exists(os.path.join(target, "summary_plot.pdf"))
    records_dir = os.path.join(target, "fragments_records")
    assert len(os.listdir(records_dir)) == 6
    with open(os.path.join(target, "overhangs_list.csv")) as f:
        overhangs = f.read().split(", ")
    assert overhangs == [f.end_overhang for f in fragments[:-1]]
