"""Graph definition for the server manifest build."""

from __future__ import annotations

from langgraph.graph import END, StateGraph

from .nodes.entry_inputs import plan_inputs
from .nodes.node_manifest import emit_node_manifests
from .nodes.report_builder import build_report
from .nodes.route_methods import extract_route_methods
from .nodes.server_entry import write_server_entry
from .state import BuildState


def build_server_graph() -> StateGraph[BuildState]:
    """Return a compiled LangGraph instance representing the build pipeline."""

    graph = StateGraph(BuildState)
    graph.add_node("plan_inputs", plan_inputs)
    graph.add_node("server_entry", write_server_entry)
    graph.add_node("node_manifests", emit_node_manifests)
    graph.add_node("route_methods", extract_route_methods)
    graph.add_node("report_builder", build_report)

    graph.set_entry_point("plan_inputs")
    graph.add_edge("plan_inputs", "server_entry")
    graph.add_edge("server_entry", "node_manifests")
    graph.add_edge("node_manifests", "route_methods")
    graph.add_edge("route_methods", "report_builder")
    graph.add_edge("report_builder", END)

    return graph.compile()
