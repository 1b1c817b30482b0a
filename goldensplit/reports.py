from dna_features_viewer import BiopythonTranslator
import numpy as np
from copy import deepcopy
import flametree
import matplotlib.pyplot as plt

from .biotools import (annotate_record, sequence_to_biopython_record,
                       crop_record, check_dna_sequence)


def fragments_locations(fragments):
    """Return the (start, end) of each fragment in the original sequence."""
    locations = []
    start = 0
    for fragment in fragments:
        end = start + len(fragment.sequence)
        locations.append((start, end))
        start = end - len(fragment.end_overhang)
    return locations


def overhangs_locations(fragments):
    """Return a list [(overhang, start), ...] for the split's overhangs."""
    return [
        (fragment.end_overhang, end - len(fragment.end_overhang))
        for fragment, (start, end) in zip(fragments[:-1],
                                          fragments_locations(fragments))
    ]


def write_report_for_split(fragments, sequence, target, left_flank='',
                           right_flank='', display_positions=False):
    """Write a complete report for a sequence split into fragments.

    Parameters
    -----------

    fragments
      The fragments returned by a SplitSetSelector's ``split_sequence``.

    sequence
      The sequence that was split (can be a record)

    target
      Either a path to a folder, a zip, or "@memory" to return raw ZIP file
      data instead of writing files. If ``target`` points to an existing
      folder/zip, it will be completely overwritten.

    left_flank
      Left flank to be added to every fragment

    right_flank
      Right flank to be added to every fragment

    display_positions
      If True, the exact coordinate of each overhang will be reported in the
      plot.
    """

    root = flametree.file_tree(target, replace=True)
    if isinstance(left_flank, str):
        left_flank = sequence_to_biopython_record(left_flank)
        annotate_record(left_flank, label='left_flank')

    if isinstance(right_flank, str):
        right_flank = sequence_to_biopython_record(right_flank)
        annotate_record(right_flank, label='right_flank')

    if hasattr(sequence, "seq"):
        record = deepcopy(sequence)
        record.annotations.setdefault("molecule_type", "DNA")
        if record.name in ("", "<unknown name>"):
            record.name = "final_sequence"
    else:
        record = sequence_to_biopython_record(check_dna_sequence(sequence))
    sequence = check_dna_sequence(record)
    overhangs = overhangs_locations(fragments)

    # PLOT SUMMARY FIGURE

    plot_record = sequence_to_biopython_record(sequence)
    for overhang, location in overhangs:
        start, end = location, location + len(overhang)
        label = ("%s\n(%d)" % (overhang, location)
                 if display_positions else overhang)
        annotate_record(plot_record, (start, end, 0), label=label)

    translator = BiopythonTranslator()
    gr = translator.translate_record(plot_record)
    ax, _ = gr.plot(with_ruler=False, figure_width=max(8, len(overhangs) / 2))
    ax.set_title("Selected overhangs", loc="left",
                 fontdict=dict(weight='bold', fontsize=13))
    ax.set_ylim(top=ax.get_ylim()[1] + 2)
    L = len(sequence)
    ax.set_xlim(-.1 * L, 1.1 * L)
    sizes = np.array([end - start
                      for start, end in fragments_locations(fragments)])
    text = "Fragment size: %d +/- %d bp. (mean +/- 1std)" % (sizes.mean(),
                                                             sizes.std())
    ax.text(L / 2, -1, text, horizontalalignment="center",
            verticalalignment="top", fontsize=14)
    ax.figure.savefig(root._file('summary_plot.pdf').open('wb'), format='pdf',
                      bbox_inches='tight')
    plt.close(ax.figure)

    #  WRITE GENBANK RECORD OF FINAL SEQUENCE

    report_record = record
    for overhang, location in overhangs:
        start, end = int(location), int(location + len(overhang))
        annotate_record(report_record, (start, end, 0), label='overhang')
    root._file('final_sequence.gb').write(report_record.format('genbank'))

    #  WRITE GENBANK RECORDS OF ALL FRAGMENTS
    sequences = []
    fragments_records_dir = root._dir("fragments_records")
    locations = fragments_locations(fragments)
    for i, (start, end) in enumerate(locations):
        seqname = "fragment_%02d" % (i + 1)
        fragment = crop_record(report_record, start, end)
        seqrecord = left_flank + fragment + right_flank
        seqrecord.annotations["molecule_type"] = "DNA"
        seqrecord.id = seqrecord.name = seqname
        fragments_records_dir._file(seqname + ".gb").write(
            seqrecord.format('genbank'))
        sequences.append(";".join([seqname, str(seqrecord.seq)]))
    root._file("fragments_sequences.csv").write("\n".join(sequences))

    root._file('overhangs_list.csv').write(", ".join([
        overhang for overhang, location in overhangs
    ]))

    return root._close()
