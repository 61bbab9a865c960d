"""Post-processors which run the CRT algorithms on dictionaries of data
products.

The manager instantiates the post-processors listed in a configuration
block and applies them, in order of priority, to each entry:

.. code-block:: yaml

    post:
      crt_cluster:
        priority: 1
        coincidence_window: 50
        geometry_file: crt_geometry.yaml
      crt_truth_match:
        geometry_file: crt_geometry.yaml
"""

from .manager import PostManager
