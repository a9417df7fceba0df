"""
Pydantic schemas for cycle detection API endpoints.

These schemas define the API request/response contracts and provide validation.
They are separate from application layer DTOs (which use dataclasses).
"""

from pydantic import BaseModel, Field


# ============================================================================
# Raw Graph Endpoint Schemas
# ============================================================================


class GraphCyclesApiRequest(BaseModel):
    """Request to detect cycles in a directed graph."""

    nodes: list[str] = Field(..., description="Node identifiers")
    edges: list[tuple[str, str]] = Field(
        default_factory=list, description="Directed edges as [from, to] pairs"
    )

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "nodes": ["a", "b", "c", "d"],
                "edges": [["a", "b"], ["b", "c"], ["c", "a"], ["c", "d"]],
            }
        }


class GraphCyclesApiResponse(BaseModel):
    """Cycles found in a directed graph."""

    has_cycles: bool = Field(..., description="Whether any cycle was found")
    cyclic_nodes: list[str] = Field(
        default_factory=list, description="Nodes lying on at least one cycle"
    )
    cycles: list[list[str]] = Field(
        default_factory=list,
        description="Closed cycle paths (first node repeated at the end)",
    )


# ============================================================================
# Bundle Endpoint Schemas
# ============================================================================


class ChunkApiModel(BaseModel):
    """An output chunk of a bundle."""

    chunk_id: str = Field(..., min_length=1, description="Chunk file name")
    modules: list[str] = Field(
        default_factory=list, description="Module ids bundled into the chunk"
    )


class ModuleApiModel(BaseModel):
    """Import information of a bundled module."""

    module_id: str = Field(..., min_length=1, description="Module identifier")
    imported_ids: list[str] = Field(
        default_factory=list, description="Statically imported module ids"
    )


class BundleCyclesApiRequest(BaseModel):
    """Request to detect circular dependencies between bundle chunks."""

    chunks: list[ChunkApiModel] = Field(..., description="Output chunks")
    modules: list[ModuleApiModel] = Field(
        default_factory=list, description="Module import information"
    )
    throw_on_cycle: bool | None = Field(
        None, description="Reject the bundle (409) when a cycle is found"
    )
    show_module_detail: bool | None = Field(
        None, description="Report the module import behind every cycle hop"
    )

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "chunks": [
                    {"chunk_id": "index.js", "modules": ["src/main.ts"]},
                    {"chunk_id": "vendor.js", "modules": ["src/shared.ts"]},
                ],
                "modules": [
                    {"module_id": "src/main.ts", "imported_ids": ["src/shared.ts"]},
                    {"module_id": "src/shared.ts", "imported_ids": ["src/main.ts"]},
                ],
                "show_module_detail": True,
            }
        }


class ModuleEdgeApiModel(BaseModel):
    """A module import crossing a chunk boundary."""

    from_module: str = Field(..., description="Importing module")
    to_module: str = Field(..., description="Imported module")


class CycleHopApiModel(BaseModel):
    """One chunk-to-chunk step of a cycle."""

    from_chunk: str = Field(..., description="Chunk the hop starts from")
    to_chunk: str = Field(..., description="Chunk the hop leads to")
    module_edges: list[ModuleEdgeApiModel] = Field(
        default_factory=list, description="Module imports justifying the hop"
    )


class ChunkCycleApiModel(BaseModel):
    """A detected chunk cycle."""

    path: list[str] = Field(..., description="Closed chunk path")
    hops: list[CycleHopApiModel] = Field(default_factory=list)


class DiagnosticApiModel(BaseModel):
    """A report line for a detected cycle."""

    severity: str = Field(..., description="info, warning or error")
    message: str = Field(..., description="Human-readable text")


class BundleCyclesApiResponse(BaseModel):
    """Circular dependencies found between bundle chunks."""

    cycle_count: int = Field(..., ge=0, description="Number of cycles found")
    cycles: list[ChunkCycleApiModel] = Field(default_factory=list)
    diagnostics: list[DiagnosticApiModel] = Field(default_factory=list)
