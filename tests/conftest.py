import itertools

import pytest

from goldensplit import FrequencyTable, reverse_complement


def _build_frequency_table():
    """Synthetic table: strong correct pairs (stronger with more GC),
    weak pairs for one-mismatch duplexes, strong palindromic self-pairs."""
    overhangs = ["".join(o) for o in itertools.product("ATGC", repeat=4)]
    data = {}
    for top in overhangs:
        partner = reverse_complement(top)
        row = {}
        for bottom in overhangs:
            differences = sum(a != b for a, b in zip(bottom, partner))
            if differences == 0:
                if bottom == top:
                    row[bottom] = 300
                else:
                    gc = sum(c in "GC" for c in top)
                    row[bottom] = 100 + 20 * gc
            elif differences == 1:
                row[bottom] = 1
        data[top] = row
    return FrequencyTable(data)


@pytest.fixture(scope="session")
def frequency_table():
    return _build_frequency_table()
