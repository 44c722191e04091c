"""
Gradoop Core - GDL Loader Examples

This script demonstrates the core features of gradoop_core:
1. Loading graphs from GDL
2. Variable lookups
3. Membership queries
4. Temporal elements
5. Binary encoding
6. NetworkX export

Prerequisites:
    pip install -e .
"""

from datetime import datetime

# =============================================================================
# SETUP
# =============================================================================

from gradoop_core import AsciiGraphLoader, TemporalGradoopConfig, setup_logging
from gradoop_core.model import decode_element, encode_element

setup_logging(level="INFO")

SOCIAL_NETWORK = """
// Two overlapping communities
databases:Community {interest: "Databases"}[
    (alice:Person {name: "Alice", age: 23})-[:knows {since: 2014}]->(bob:Person {name: "Bob", age: 23})
    (bob)-[:knows {since: 2013}]->(eve:Person {name: "Eve", age: 35})
]
hadoop:Community {interest: "Hadoop"}[
    (eve)<-[:hasModerator]-(frank:Person {name: "Frank", age: 41})
    (alice)-[:knows]->(frank)
]
"""


# =============================================================================
# 1. LOADING
# =============================================================================
print("\n" + "="*60)
print("1. LOADING")
print("="*60)

loader = AsciiGraphLoader.from_string(SOCIAL_NETWORK)
print(f"✓ Loaded: {loader}")


# =============================================================================
# 2. VARIABLE LOOKUPS
# =============================================================================
print("\n" + "="*60)
print("2. VARIABLE LOOKUPS")
print("="*60)

alice = loader.get_vertex_by_variable("alice")
print(alice)

people = loader.get_vertices_by_variables("alice", "bob", "nobody")
print(f"✓ Found {len(people)} of 3 requested people")


# =============================================================================
# 3. MEMBERSHIP QUERIES
# =============================================================================
print("\n" + "="*60)
print("3. MEMBERSHIP QUERIES")
print("="*60)

for name in ("databases", "hadoop"):
    members = loader.get_vertices_by_graph_variables(name)
    print(f"  {name}: {sorted(v.get_property_value('name').get_string() for v in members)}")

both = loader.get_vertices_by_graph_variables("databases", "hadoop")
print(f"✓ {len(both)} people in either community")

community_ids = [head.id for head in loader.get_graph_heads_by_variables("databases", "hadoop")]
shared = [v for v in both if v.is_in_all_of(community_ids)]
print(f"✓ {len(shared)} people in both communities")


# =============================================================================
# 4. TEMPORAL ELEMENTS
# =============================================================================
print("\n" + "="*60)
print("4. TEMPORAL ELEMENTS")
print("="*60)

temporal = AsciiGraphLoader.from_string(SOCIAL_NETWORK, TemporalGradoopConfig.create_config())
alice_t = temporal.get_vertex_by_variable("alice")
alice_t.set_valid_time(datetime(2024, 1, 1), datetime(2025, 1, 1))
print(f"✓ {alice_t!r}")
print(f"  valid on 2024-06-01: {alice_t.is_valid_at(datetime(2024, 6, 1))}")
print(f"  valid on 2025-06-01: {alice_t.is_valid_at(datetime(2025, 6, 1))}")


# =============================================================================
# 5. BINARY ENCODING
# =============================================================================
print("\n" + "="*60)
print("5. BINARY ENCODING")
print("="*60)

payload = encode_element(alice_t)
restored = decode_element(payload)
print(f"✓ {len(payload)} bytes, round trip equal: {restored.epgm_equals(alice_t)}")


# =============================================================================
# 6. NETWORKX EXPORT
# =============================================================================
print("\n" + "="*60)
print("6. NETWORKX EXPORT")
print("="*60)

graph = loader.get_logical_graph_by_variable("databases").to_networkx()
print(f"✓ MultiDiGraph: {graph.number_of_nodes()} nodes, {graph.number_of_edges()} edges")
for source, target, data in graph.edges(data=True):
    print(f"  {graph.nodes[source]['properties']['name']} -[{data['label']}]-> "
          f"{graph.nodes[target]['properties']['name']}")
