# This source code is part of the FastaIO package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

from os.path import join, dirname, realpath


def data_dir():
    return join(dirname(realpath(__file__)), "data")


def reference_entries(path):
    """
    Parse a plain FASTA file in the simplest possible way, as reference
    for the streaming reader.
    """
    entries = []
    with open(path, "r") as file:
        for line in file.read().splitlines():
            line = line.strip()
            if len(line) == 0:
                continue
            if line[0] == ">":
                entries.append((line[1:].strip(), []))
            else:
                entries[-1][1].append(line)
    return [(description, "".join(lines)) for description, lines in entries]
