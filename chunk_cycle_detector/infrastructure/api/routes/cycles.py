"""
Cycle detection API routes.

Implements the REST API for detecting cycles in directed graphs and
circular dependencies between bundle chunks.
"""

from fastapi import APIRouter, Depends, status

from chunk_cycle_detector.application.dtos.cycle_detection_dto import (
    ChunkDTO,
    DetectChunkCyclesRequest,
    DetectGraphCyclesRequest,
    ModuleDTO,
)
from chunk_cycle_detector.application.use_cases.detect_chunk_cycles import (
    CircularChunkDependencyError,
    DetectChunkCyclesUseCase,
)
from chunk_cycle_detector.application.use_cases.detect_graph_cycles import (
    DetectGraphCyclesUseCase,
)
from chunk_cycle_detector.infrastructure.api.dependencies import (
    get_detect_chunk_cycles_use_case,
    get_detect_graph_cycles_use_case,
)
from chunk_cycle_detector.infrastructure.api.schemas.cycle_schema import (
    BundleCyclesApiRequest,
    BundleCyclesApiResponse,
    ChunkCycleApiModel,
    CycleHopApiModel,
    DiagnosticApiModel,
    GraphCyclesApiRequest,
    GraphCyclesApiResponse,
    ModuleEdgeApiModel,
)
from chunk_cycle_detector.infrastructure.api.schemas.error_schema import ProblemDetails
from chunk_cycle_detector.infrastructure.observability.tracing import trace_detection

router = APIRouter()


@router.post(
    "/graphs/cycles",
    response_model=GraphCyclesApiResponse,
    status_code=status.HTTP_200_OK,
    summary="Detect cycles in a directed graph",
    description="Run Kahn's reduction and DFS extraction over nodes and edges",
    responses={
        200: {"description": "Detection completed (cycles may be empty)"},
        422: {"model": ProblemDetails, "description": "Invalid request schema"},
        500: {"model": ProblemDetails, "description": "Internal server error"},
    },
)
async def detect_graph_cycles(
    request: GraphCyclesApiRequest,
    use_case: DetectGraphCyclesUseCase = Depends(get_detect_graph_cycles_use_case),
) -> GraphCyclesApiResponse:
    """
    Detect cycles in a directed graph.

    - Self-loops and duplicate edges are ignored
    - Edges referencing undeclared nodes are ignored
    - Each cycle is returned closed (first node repeated at the end)
    """
    with trace_detection(
        "graph", nodes=len(request.nodes), edges=len(request.edges)
    ) as run:
        result = await use_case.execute(
            DetectGraphCyclesRequest(
                nodes=list(request.nodes),
                edges=[(source, target) for source, target in request.edges],
            )
        )
        run.cycles = len(result.cycles)

    return GraphCyclesApiResponse(
        has_cycles=result.has_cycles,
        cyclic_nodes=result.cyclic_nodes,
        cycles=result.cycles,
    )


@router.post(
    "/bundles/cycles",
    response_model=BundleCyclesApiResponse,
    status_code=status.HTTP_200_OK,
    summary="Detect circular dependencies between bundle chunks",
    description=(
        "Derive chunk-level edges from module imports and report every "
        "chunk cycle with the module imports behind each hop"
    ),
    responses={
        200: {"description": "Detection completed (cycles may be empty)"},
        409: {
            "model": ProblemDetails,
            "description": "Cycles detected and throw_on_cycle is enabled",
        },
        422: {"model": ProblemDetails, "description": "Invalid request schema"},
        500: {"model": ProblemDetails, "description": "Internal server error"},
    },
)
async def detect_bundle_cycles(
    request: BundleCyclesApiRequest,
    use_case: DetectChunkCyclesUseCase = Depends(get_detect_chunk_cycles_use_case),
) -> BundleCyclesApiResponse:
    """
    Detect circular dependencies between the chunks of a bundle.

    - A module belongs to the last chunk listing it
    - Imports of unknown modules and imports within a chunk are ignored
    - With throw_on_cycle, any cycle turns the response into a 409 problem
    """
    with trace_detection(
        "bundle", chunks=len(request.chunks), modules=len(request.modules)
    ) as run:
        try:
            result = await use_case.execute(
                DetectChunkCyclesRequest(
                    chunks=[
                        ChunkDTO(chunk_id=chunk.chunk_id, modules=list(chunk.modules))
                        for chunk in request.chunks
                    ],
                    modules=[
                        ModuleDTO(
                            module_id=module.module_id,
                            imported_ids=list(module.imported_ids),
                        )
                        for module in request.modules
                    ],
                    throw_on_cycle=request.throw_on_cycle,
                    show_module_detail=request.show_module_detail,
                )
            )
        except CircularChunkDependencyError as exc:
            run.cycles = len(exc.cycles)
            raise
        run.cycles = result.cycle_count

    return BundleCyclesApiResponse(
        cycle_count=result.cycle_count,
        cycles=[
            ChunkCycleApiModel(
                path=cycle.path,
                hops=[
                    CycleHopApiModel(
                        from_chunk=hop.from_chunk,
                        to_chunk=hop.to_chunk,
                        module_edges=[
                            ModuleEdgeApiModel(
                                from_module=edge.from_module,
                                to_module=edge.to_module,
                            )
                            for edge in hop.module_edges
                        ],
                    )
                    for hop in cycle.hops
                ],
            )
            for cycle in result.cycles
        ],
        diagnostics=[
            DiagnosticApiModel(severity=event.severity, message=event.message)
            for event in result.diagnostics
        ],
    )
