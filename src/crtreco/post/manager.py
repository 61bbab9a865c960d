"""Manages the operation of post-processors."""

import time
from collections import OrderedDict, defaultdict
from copy import deepcopy

import numpy as np

from crtreco.utils.logger import logger

from .factories import post_processor_factory

__all__ = ["PostManager"]


class PostManager:
    """Manager in charge of handling post-processing scripts.

    It loads all the post-processor objects once and feeds them data.

    Attributes
    ----------
    modules : OrderedDict
        Post-processors, in order of execution
    times : Dict[str, float]
        Cumulative wall time spent in each post-processor (s)
    """

    def __init__(self, cfg, post_list=None):
        """Initialize the post-processing manager.

        Parameters
        ----------
        cfg : dict
            Post-processor configurations
        post_list : List[str], optional
            List of post-processors which have already been run
        """
        # Loop over the post-processor modules and get their priorities
        cfg = deepcopy(cfg)
        keys = np.array(list(cfg.keys()))
        priorities = -np.ones(len(keys), dtype=np.int32)
        for i, key in enumerate(keys):
            if "priority" in cfg[key]:
                priorities[i] = cfg[key].pop("priority")

        # Add the modules to a processor list in decreasing order of priority
        self.modules = OrderedDict()
        self.times = {}
        keys = keys[np.argsort(-priorities, kind="stable")]
        for key in keys:
            self.modules[key] = post_processor_factory(key, cfg[key])
            self.times[key] = 0.0

            # Check dependencies
            ups_post = tuple(post_list or ()) + tuple(self.modules)
            for post in self.modules[key]._upstream:
                assert post in ups_post, (
                    f"Post-processor `{key}` is missing an essential "
                    f"upstream post-processor: `{post}`."
                )

    def __call__(self, data):
        """Pass one batch of data through the post-processors.

        If the `index` data product is a list, the data is treated as a
        batch of entries and every data product must be a list with one
        element per entry.

        Parameters
        ----------
        data : dict
            Dictionary of data products, updated in place
        """
        single_entry = "index" not in data or np.isscalar(data["index"])
        for key, module in self.modules.items():
            start = time.time()
            if single_entry:
                result = module(data)

            else:
                num_entries = len(data["index"])
                result = defaultdict(list)
                for entry in range(num_entries):
                    result_e = module(data, entry)
                    if result_e is not None:
                        for k, v in result_e.items():
                            result[k].append(v)

            duration = time.time() - start
            self.times[key] += duration
            logger.debug(f"Post-processor `{key}` ran in {duration:.3f} s.")

            # Update the input dictionary
            if result is not None:
                for k, val in result.items():
                    if not single_entry:
                        assert len(val) == num_entries, (
                            f"The number {k} ({len(val)}) does not match "
                            f"the number of entries ({num_entries})."
                        )
                    data[k] = val
