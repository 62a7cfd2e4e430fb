"""
Sub-package Documentation
==========================

The cluster sub-package is responsible for grouping junctions from split reads which support the same structural
variant.

Types of Output Files
----------------------

+--------------------------------+------------------+----------------------------------------------------------------------+
| expected name/suffix           | file type/format | content                                                              |
+================================+==================+======================================================================+
| ``clusters.tab``               | text/tabbed      | one row per cluster, the lead junction and the cluster averages      |
+--------------------------------+------------------+----------------------------------------------------------------------+
| ``cluster_assignment.tab``     | text/tabbed      | one row per clustered junction with the id of its cluster            |
+--------------------------------+------------------+----------------------------------------------------------------------+
| ``JUNCTURE.COMPLETE``          | text             | complete stamp with the run time                                     |
+--------------------------------+------------------+----------------------------------------------------------------------+

Algorithm Overview
--------------------

- Sort the junctions
- Partition the junctions

    - Split the junctions where mate1 changes sequence or orientation, or moves more than 50bp from the previous junction
    - Sort each partition by mate2 and split it again the same way using mate2

- Subsample partitions larger than the maximum partition size
- Cluster each partition

    - Compute the distances between all pairs of junctions
    - Build the dendrogram by average linkage
    - Cut the dendrogram at the clustering cutoff

- Output the sorted clusters and the mapping of junctions to clusters

"""
from .cluster import Cluster, simple_clustering_method
from .hierarchical import hierarchical_clustering_method, junction_distance
from .main import cluster_junctions
from .partition import partition_junctions
