"""
WEAVER++/ARC Lesion Sweep — Network Topology
=============================================
Layer inventory, node labels and binary adjacency matrices of the two
lexical networks used by the studies:

* ``SMALL`` — cat, dog, mat, fog, fish with ten phonemes; a syllable
  program per word.
* ``LARGE`` — the Sydney Language Battery animals plus mat, fog and fish,
  22 phonemes and 28 syllable programs.

Adjacency matrices are indexed ``[source node, destination node]`` and keyed
by ``(source layer, destination layer)``.  They are binary (1 = connection
present); rate scaling happens in ``network.scale``.
"""

from collections import namedtuple

import numpy as np

from .config import CRITICAL_NODES
from .errors import ConfigurationError

# ── Layers ───────────────────────────────────────────────────────────
CONCEPT = "concept"
LEMMA = "lemma"
OUTPUT_MORPHEME = "output_morpheme"
OUTPUT_PHONEME = "output_phoneme"
SYLLABLE = "syllable"
INPUT_PHONEME = "input_phoneme"
INPUT_MORPHEME = "input_morpheme"

LAYERS = (
    CONCEPT, LEMMA, OUTPUT_MORPHEME, OUTPUT_PHONEME,
    SYLLABLE, INPUT_PHONEME, INPUT_MORPHEME,
)

# binary matrices a topology must supply
ADJACENCY_KEYS = (
    (CONCEPT, CONCEPT),
    (CONCEPT, LEMMA),
    (LEMMA, OUTPUT_MORPHEME),
    (OUTPUT_MORPHEME, OUTPUT_PHONEME),
    (OUTPUT_PHONEME, SYLLABLE),
    (INPUT_PHONEME, OUTPUT_PHONEME),
    (INPUT_PHONEME, INPUT_MORPHEME),
    (INPUT_MORPHEME, OUTPUT_MORPHEME),
    (INPUT_MORPHEME, LEMMA),
)

Topology = namedtuple("Topology", [
    "name",          # str
    "layer_sizes",   # dict layer -> node count
    "labels",        # dict layer -> tuple of node labels
    "adjacency",     # dict (source, dest) -> binary (n_source, n_dest) array
    "critical",      # dict critical-node name -> (layer, node index)
    "spoken_input",  # input-phoneme indices presented in sequence
])


def _grid(*rows):
    """Parse rows of ``Y``/``N`` characters into a binary float matrix."""
    return np.array([[1.0 if c == "Y" else 0.0 for c in row] for row in rows])


def _identity(n):
    return np.eye(n)


def node_index(topology, layer, label):
    """Index of the node called *label* in *layer*."""
    try:
        return topology.labels[layer].index(label)
    except (KeyError, ValueError):
        raise ConfigurationError(
            f"{topology.name}: no node {label!r} in layer {layer!r}") from None


# ─────────────────────────────────────────────────────────────────────
# Small network: five words
# ─────────────────────────────────────────────────────────────────────

_SMALL_WORDS = ("cat", "dog", "mat", "fog", "fish")
_SMALL_PHONEMES = ("k", "e", "t", "d", "o", "g", "m", "f", "i", "s")

SMALL = Topology(
    name="small",
    layer_sizes={
        CONCEPT: 5, LEMMA: 5, OUTPUT_MORPHEME: 5, OUTPUT_PHONEME: 10,
        SYLLABLE: 5, INPUT_PHONEME: 10, INPUT_MORPHEME: 5,
    },
    labels={
        CONCEPT: _SMALL_WORDS,
        LEMMA: _SMALL_WORDS,
        OUTPUT_MORPHEME: _SMALL_WORDS,
        OUTPUT_PHONEME: _SMALL_PHONEMES,
        SYLLABLE: _SMALL_WORDS,
        INPUT_PHONEME: _SMALL_PHONEMES,
        INPUT_MORPHEME: _SMALL_WORDS,
    },
    adjacency={
        #            cat dog mat fog fish
        (CONCEPT, CONCEPT): _grid(
            "NYNNY",
            "YNNNY",
            "NNNNN",
            "NNNNN",
            "YYNNN",
        ),
        (CONCEPT, LEMMA): _identity(5),
        (LEMMA, OUTPUT_MORPHEME): _identity(5),
        #                          k e t d o g m f i s
        (OUTPUT_MORPHEME, OUTPUT_PHONEME): _grid(
            "YYYNNNNNNN",   # cat
            "NNNYYYNNNN",   # dog
            "NYYNNNYNNN",   # mat
            "NNNNYYNYNN",   # fog
            "NNNNNNNYYY",   # fish
        ),
        # phoneme -> cat dog mat fog fish
        (OUTPUT_PHONEME, SYLLABLE): _grid(
            "YNNNN",   # k
            "YNYNN",   # e
            "YNYNN",   # t
            "NYNNN",   # d
            "NYNYN",   # o
            "NYNYN",   # g
            "NNYNN",   # m
            "NNNYY",   # f
            "NNNNY",   # i
            "NNNNY",   # s
        ),
        (INPUT_PHONEME, OUTPUT_PHONEME): _identity(10),
        (INPUT_PHONEME, INPUT_MORPHEME): _grid(
            "YNNNN",   # k
            "YNYNN",   # e
            "YNYNN",   # t
            "NYNNN",   # d
            "NYNYN",   # o
            "NYNYN",   # g
            "NNYNN",   # m
            "NNNYY",   # f
            "NNNNY",   # i
            "NNNNY",   # s
        ),
        (INPUT_MORPHEME, OUTPUT_MORPHEME): _identity(5),
        (INPUT_MORPHEME, LEMMA): _identity(5),
    },
    critical={
        "concept_target": (CONCEPT, 0),     # cat
        "concept_foil": (CONCEPT, 1),       # dog
        "lemma_target": (LEMMA, 0),
        "lemma_foil": (LEMMA, 1),
        "syllable_target": (SYLLABLE, 0),   # cat
        "syllable_foil": (SYLLABLE, 2),     # mat
    },
    spoken_input=(0, 1, 2),                 # k, e, t
)


# ─────────────────────────────────────────────────────────────────────
# Large network: Sydney Language Battery animals
# ─────────────────────────────────────────────────────────────────────

_LARGE_WORDS = (
    "butterfly", "elephant", "caterpillar", "dinosaur", "rhinoceros",
    "hippopotamus", "orangutan", "cat", "dog", "mat", "fog", "fish",
)
_LARGE_PHONEMES = (
    "b", "d", "f", "g", "h", "k", "l", "m", "n", "ŋ", "p",
    "r", "s", "ʃ", "t", "a", "ä", "ə", "e", "ī", "i", "ȯ",
)
_LARGE_SYLLABLES = (
    "bə", "dī", "dȯg", "ə", "e", "fənt", "flī", "fȯg", "fiʃ", "hi",
    "ka", "kat", "lə", "lər", "mat", "məs", "näs", "nə", "pä", "pə",
    "pi", "raŋ", "rəs", "rī", "sȯr", "taŋ", "tə", "tər",
)

LARGE = Topology(
    name="large",
    layer_sizes={
        CONCEPT: 12, LEMMA: 12, OUTPUT_MORPHEME: 12, OUTPUT_PHONEME: 22,
        SYLLABLE: 28, INPUT_PHONEME: 22, INPUT_MORPHEME: 12,
    },
    labels={
        CONCEPT: _LARGE_WORDS,
        LEMMA: _LARGE_WORDS,
        OUTPUT_MORPHEME: _LARGE_WORDS,
        OUTPUT_PHONEME: _LARGE_PHONEMES,
        SYLLABLE: _LARGE_SYLLABLES,
        INPUT_PHONEME: _LARGE_PHONEMES,
        INPUT_MORPHEME: _LARGE_WORDS,
    },
    adjacency={
        (CONCEPT, CONCEPT): _grid(
            "NYYYYYYYYNNY",   # butterfly
            "YNYYYYYYYNNY",   # elephant
            "YYNYYYYYYNNY",   # caterpillar
            "YYYNYYYYYNNY",   # dinosaur
            "YYYYNYYYYNNY",   # rhinoceros
            "YYYYYNYYYNNY",   # hippopotamus
            "YYYYYYNYYNNY",   # orangutan
            "YYYYYYYNYNNY",   # cat
            "YYYYYYYYYNNY",   # dog
            "NNNNNNNNNNNN",   # mat
            "NNNNNNNNNNNN",   # fog
            "YYYYYYYYYNNN",   # fish
        ),
        (CONCEPT, LEMMA): _identity(12),
        (LEMMA, OUTPUT_MORPHEME): _identity(12),
        #                          bdfghklmnŋprsʃtaäəeīiȯ
        (OUTPUT_MORPHEME, OUTPUT_PHONEME): _grid(
            "YNYNNYNNNNYNNYNNYNYNNN",   # butterfly
            "NNYNNNYNYNNNNNYNNYYNNN",   # elephant
            "NNNNNYYNNNYYNNYYNYNNYN",   # caterpillar
            "NYNNNNNNYNNYYNNNNYNNYY",   # dinosaur
            "NNNNNNNNYNNYYNNNYYNYNN",   # rhinoceros
            "NNNNYNNYNNYNYNYNYYNNYN",   # hippopotamus
            "NNNNNNNNNYNYNNYYNYNNNN",   # orangutan
            "NNNNNYNNNNNNNNYYNNNNNN",   # cat
            "NYNYNNNNNNNNNNNNNNNNNY",   # dog
            "NNNNNNNYNNNNNNYYNNNNNN",   # mat
            "NNYYNNNNNNNNNNNNNNNNNY",   # fog
            "NNYNNNNNNNNNNYNNNNNNYN",   # fish
        ),
        (OUTPUT_PHONEME, SYLLABLE): _grid(
            "YNNNNNNNNNNNNNNNNNNNNNNNNNNN",   # b
            "NYYNNNNNNNNNNNNNNNNNNNNNNNNN",   # d
            "NNNNNYYYYNNNNNNNNNNNNNNNNNNN",   # f
            "NNYNNNNYNNNNNNNNNNNNNNNNNNNN",   # g
            "NNNNNNNNNYNNNNNNNNNNNNNNNNNN",   # h
            "NNNNNNNNNNYYNNNNNNNNNNNNNNNN",   # k
            "NNNNNNYNNNNNYYNNNNNNNNNNNNNN",   # l
            "NNNNNNNNNNNNNNYYNNNNNNNNNNNN",   # m
            "NNNNNYNNNNNNNNNNYYNNNNNNNNNN",   # n
            "NNNNNNNNNNNNNNNNNNNNNYNNNYNN",   # ŋ
            "NNNNNNNNNNNNNNNNNNYYYNNNNNNN",   # p
            "NNNNNNNNNNNNNYNNNNNNNYYYYNNY",   # r
            "NNNNNNNNNNNNNNNYYNNNNNYNYNNN",   # s
            "NNNNNNNNYNNNNNNNNNNNNNNNNNNN",   # ʃ
            "NNNNNYNNNNNYNNYNNNNNNNNNNYYY",   # t
            "NNNNNNNNNNYYNNYNNNNNNYNNNYNN",   # a
            "NNNNNNNNNNNNNNNNYNYNNNNNNNNN",   # ä
            "NNNYNYNNNNNNYYNYNYNYNNYNNNYY",   # ə
            "YNNNYNNNNNNNNNNNNNNNNNNNNNNN",   # e
            "NYNNNNYNNNNNNNNNNNNNNNNYNNNN",   # ī
            "NNNNNNNNYYNNNNNNNNNNYNNNNNNN",   # i
            "NNYNNNNYNNNNNNNNNNNNNNNNYNNN",   # ȯ
        ),
        (INPUT_PHONEME, OUTPUT_PHONEME): _identity(22),
        (INPUT_PHONEME, INPUT_MORPHEME): _grid(
            "YNNNNNNNNNNN",   # b
            "NNNYNNNNYNNN",   # d
            "YYNNNNNNNNYY",   # f
            "NNNNNNNNYNYN",   # g
            "NNNNNYNNNNNN",   # h
            "NNYNNNNYNNNN",   # k
            "YYYNNNNNNNNN",   # l
            "NNNNNYNNNYNN",   # m
            "NYNYYNNNNNNN",   # n
            "NNNNNNYNNNNN",   # ŋ
            "NNYNNYNNNNNN",   # p
            "YNYYYNYNNNNN",   # r
            "NNNYYYNNNNNN",   # s
            "NNNNNNNNNNNY",   # ʃ
            "YYYNNYYYNYNN",   # t
            "NNYNNNYYNYNN",   # a
            "NNNNYYNNNNNN",   # ä
            "YYYYYYYNNNNN",   # ə
            "NYNNNNNNNNNN",   # e
            "YNNYYNNNNNNN",   # ī
            "NNYNNYNNNNNY",   # i
            "NNNYNNNNYNYN",   # ȯ
        ),
        (INPUT_MORPHEME, OUTPUT_MORPHEME): _identity(12),
        (INPUT_MORPHEME, LEMMA): _identity(12),
    },
    critical={
        "concept_target": (CONCEPT, 7),     # cat
        "concept_foil": (CONCEPT, 8),       # dog
        "lemma_target": (LEMMA, 7),
        "lemma_foil": (LEMMA, 8),
        "syllable_target": (SYLLABLE, 11),  # kat
        "syllable_foil": (SYLLABLE, 14),    # mat
    },
    spoken_input=(5, 15, 14),               # k, a, t
)

TOPOLOGIES = {SMALL.name: SMALL, LARGE.name: LARGE}


# ─────────────────────────────────────────────────────────────────────
# Validation
# ─────────────────────────────────────────────────────────────────────

def validate_topology(topology):
    """
    Check a topology for shape and content errors.

    Every layer needs a positive node count and one label per node; every
    key in ``ADJACENCY_KEYS`` needs a 2-D binary matrix shaped
    ``(n_source, n_dest)``; critical nodes and spoken-input phonemes must
    index existing nodes.

    Raises
    ------
    ConfigurationError
        Describing the first problem found.
    """
    name = topology.name

    for layer in LAYERS:
        n = topology.layer_sizes.get(layer)
        if n is None or int(n) != n or n <= 0:
            raise ConfigurationError(f"{name}: layer {layer!r} needs a positive node count")
        labels = topology.labels.get(layer)
        if labels is None or len(labels) != n:
            raise ConfigurationError(
                f"{name}: layer {layer!r} has {n} nodes but "
                f"{0 if labels is None else len(labels)} labels")

    for key in ADJACENCY_KEYS:
        if key not in topology.adjacency:
            raise ConfigurationError(f"{name}: missing adjacency matrix {key[0]} -> {key[1]}")
        W = np.asarray(topology.adjacency[key])
        expected = (topology.layer_sizes[key[0]], topology.layer_sizes[key[1]])
        if W.ndim != 2 or W.shape != expected:
            raise ConfigurationError(
                f"{name}: adjacency {key[0]} -> {key[1]} has shape {W.shape}, "
                f"expected {expected}")
        if not np.all(np.isin(W, (0.0, 1.0))):
            raise ConfigurationError(
                f"{name}: adjacency {key[0]} -> {key[1]} must be binary")

    for role, (layer, idx) in topology.critical.items():
        if layer not in topology.layer_sizes or not 0 <= idx < topology.layer_sizes[layer]:
            raise ConfigurationError(f"{name}: critical node {role!r} out of range")

    missing = sorted(set(CRITICAL_NODES) - set(topology.critical))
    if missing:
        raise ConfigurationError(f"{name}: missing critical node(s) {', '.join(missing)}")

    n_phonemes = topology.layer_sizes[INPUT_PHONEME]
    if len(topology.spoken_input) != 3 or not all(
            0 <= i < n_phonemes for i in topology.spoken_input):
        raise ConfigurationError(
            f"{name}: spoken input must name three input phonemes, got {topology.spoken_input}")

    return topology
