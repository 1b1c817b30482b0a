import json


class FrequencyTable:
    """Empirical ligation frequencies between overhang strands.

    The table is a two-level mapping ``{top_strand: {bottom_strand: count}}``
    where ``count`` is the number of times the ``top_strand`` overhang was
    observed ligated to the ``bottom_strand`` overhang. Pairs absent from the
    table count as zero.

    Parameters
    ----------

    data
      A dictionnary of dictionnaries of integers, e.g.
      ``{"ATCG": {"CGAT": 512, "CGAA": 3}, ...}``
    """

    def __init__(self, data=None):
        self.data = {}
        for top_strand, row in (data or {}).items():
            if not hasattr(row, "items"):
                raise ValueError("Row %s of the frequency table should be a "
                                 "mapping, not %s" % (top_strand, row))
            self.data[top_strand] = {
                bottom_strand: self._parse_count(top_strand, bottom_strand,
                                                 count)
                for bottom_strand, count in row.items()
            }

    @staticmethod
    def _parse_count(top_strand, bottom_strand, count):
        error = ValueError("Invalid count for (%s, %s): %s" %
                           (top_strand, bottom_strand, count))
        if isinstance(count, bool) or not isinstance(count, (int, str)):
            raise error
        try:
            parsed = int(count)
        except ValueError:
            raise error
        if parsed < 0:
            raise ValueError("Negative count for (%s, %s): %d" %
                             (top_strand, bottom_strand, parsed))
        return parsed

    @staticmethod
    def from_json_string(text):
        """Return a FrequencyTable from a JSON string."""
        return FrequencyTable(json.loads(text))

    @staticmethod
    def from_json_file(path):
        """Return a FrequencyTable from a JSON file (such as
        ``freq_overhang.json``)."""
        with open(path, "r") as f:
            return FrequencyTable(json.load(f))

    def to_json_file(self, path):
        with open(path, "w") as f:
            json.dump(self.data, f, indent=1, sort_keys=True)

    def lookup(self, top_strand, bottom_strand):
        """Return the ligation count of ``top_strand`` with ``bottom_strand``,
        or 0 if the pair is not in the table."""
        return self.data.get(top_strand, {}).get(bottom_strand, 0)

    def __getitem__(self, top_strand):
        return self.data.get(top_strand, {})

    def __contains__(self, top_strand):
        return top_strand in self.data

    def __len__(self):
        return len(self.data)
