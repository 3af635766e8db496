# config.py

import json
import os


class Config:
    """Global configuration optionally loaded from a JSON file.

    Attributes
    ----------
    coin:
        Default coin policy used by the CLI and the sweep runner when none is
        given. Either ``"grover"`` or ``"akr"``. :func:`~Quantum_Walks.engine.build_simulator`
        itself does not read it.
    self_loop_weight:
        Default weight ``l`` of the lackadaisical self-loop. ``0.0`` yields the
        plain coined walk.
    tolerance:
        Absolute tolerance used by the invariant checks (unitarity, fixed
        point, trajectory comparison).
    diagnostics:
        When ``True`` every engine verifies the unitarity invariant after each
        step and raises :class:`~Quantum_Walks.engine.base.UnitarityError` on a
        violation. Costs one extra pass over the state per step.
    search:
        Parameters for the search drivers in :mod:`experiments.search`.
        ``max_steps_factor`` bounds a run at ``factor * N`` steps when no
        explicit limit is given, ``rise_after`` is the step after which a
        rising overlap ends a run and ``probability_drop`` is the drop below the
        best marked probability that ends a max-probability scan.
    log_verbosity:
        Level name passed to :func:`logging.basicConfig` by the CLI.
    output_dir:
        Default directory for sweep results when ``--out`` is omitted.
    """

    base_dir = os.path.abspath(os.path.dirname(__file__))
    config_file = None
    output_dir = os.path.join(base_dir, "output")

    #: Coin policy; ``"grover"`` or ``"akr"``
    coin = "grover"
    self_loop_weight = 0.0

    tolerance = 1e-9
    diagnostics = False

    search = {
        "max_steps_factor": 5,
        "rise_after": 500,
        "probability_drop": 0.05,
    }

    log_verbosity = "info"

    @classmethod
    def load_from_file(cls, path: str) -> None:
        """Load configuration values from a JSON file.

        Only keys that already exist as attributes on ``Config`` will be
        assigned. Nested dictionaries are merged recursively when the existing
        attribute is also a ``dict``. ``output_dir`` is resolved relative to the
        directory containing ``path``.

        Parameters
        ----------
        path:
            Path to the JSON configuration file.

        Raises
        ------
        FileNotFoundError
            If ``path`` does not exist.
        ValueError
            If a known key holds an invalid value: a negative or non-numeric
            ``self_loop_weight``, an unknown ``coin``, a ``tolerance`` that is
            not a positive number, a non-boolean ``diagnostics`` or bad
            ``search`` entries. Nothing is assigned in that case.
        """

        if not os.path.exists(path):
            raise FileNotFoundError(path)
        with open(path) as f:
            data = json.load(f)

        cls._validate(data)

        cls.config_file = os.path.abspath(path)
        base_dir = os.path.dirname(cls.config_file)
        for key, value in data.items():
            if not hasattr(cls, key) or key.startswith("_"):
                continue
            if key == "output_dir" and not os.path.isabs(value):
                value = os.path.join(base_dir, value)
            current = getattr(cls, key)
            if isinstance(current, dict) and isinstance(value, dict):
                current.update(value)
            else:
                setattr(cls, key, value)

    @staticmethod
    def _validate(data: dict) -> None:
        """Raise ``ValueError`` if ``data`` holds an invalid value for a known key."""

        def number(value) -> bool:
            return isinstance(value, (int, float)) and not isinstance(value, bool)

        if not isinstance(data, dict):
            raise ValueError("configuration file must hold a JSON object")
        if "self_loop_weight" in data:
            weight = data["self_loop_weight"]
            if not number(weight) or weight < 0:
                raise ValueError(f"self_loop_weight must be non-negative, got {weight!r}")
        if str(data.get("coin", "grover")).lower() not in ("grover", "akr"):
            raise ValueError(f"unknown coin {data['coin']!r}")
        if "tolerance" in data:
            tolerance = data["tolerance"]
            if not number(tolerance) or tolerance <= 0:
                raise ValueError(f"tolerance must be a positive number, got {tolerance!r}")
        if "diagnostics" in data and not isinstance(data["diagnostics"], bool):
            raise ValueError(f"diagnostics must be true or false, got {data['diagnostics']!r}")
        if "search" in data:
            search = data["search"]
            if not isinstance(search, dict):
                raise ValueError("search must be an object")
            # minimum allowed value and whether it is exclusive
            limits = {
                "max_steps_factor": (0, True),
                "rise_after": (0, False),
                "probability_drop": (0, False),
            }
            for key, (low, exclusive) in limits.items():
                if key not in search:
                    continue
                value = search[key]
                if not number(value) or value < low or (exclusive and value == low):
                    raise ValueError(f"invalid search.{key}: {value!r}")
