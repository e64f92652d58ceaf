from __future__ import annotations

import os

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from .errors import MalformedConstraint, MalformedTerm
from .lp.normalize import normalize, to_maximizations
from .lp.parser import parse_constraint_block, parse_equation
from .lp.simplex import simplex_solve
from .schemas import LPProblem, SolveOptions

app = FastMCP("Simplex Optimizer")


@app.tool()
def solve_linear_program(problem: LPProblem, options: SolveOptions | None = None) -> dict:
    """Maximise the problem's objective and return the solution as JSON."""
    opts = options or SolveOptions()
    try:
        solution = simplex_solve(problem, opts)
    except (MalformedConstraint, MalformedTerm) as e:
        return {"error": f"Failed to parse problem: {e}", "solution": None}
    return {"solution": solution.model_dump()}


@app.tool()
def maximize_expression(objective: str, constraints: str, options: SolveOptions | None = None) -> dict:
    """
    Maximise ``objective`` subject to a newline-separated block of constraints.

    Args:
        objective: Linear expression such as ``"3x + 2y"``.
        constraints: One constraint per line, e.g. ``"x + y <= 4"``. Blank
            lines are ignored.
        options: Optional solver options.
    """
    problem = LPProblem(objective=objective, constraints=parse_constraint_block(constraints))
    return solve_linear_program(problem, options)


@app.tool()
def parse_linear_equation(text: str) -> dict:
    """Parse one constraint line and show its normalized ``<=`` form(s)."""
    try:
        equation = parse_equation(text)
    except (MalformedConstraint, MalformedTerm) as e:
        return {"error": str(e), "parsed": None, "normalized": None}
    return {
        "parsed": equation.model_dump(),
        "normalized": [normalize(eq).model_dump() for eq in to_maximizations(equation)],
    }


if __name__ == "__main__":
    import sys

    transport = os.environ.get("MCP_TRANSPORT", "stdio")

    if transport == "stdio" or "--stdio" in sys.argv:
        app.run(transport="stdio")
    else:
        port = int(os.environ.get("PORT", "8081"))
        app.settings.host = "0.0.0.0"
        app.settings.port = port
        app.settings.streamable_http_path = "/mcp"
        app.settings.transport_security = TransportSecuritySettings(
            enable_dns_rebinding_protection=False,
            allowed_hosts=["*"],
            allowed_origins=["*"],
        )
        app.run(transport="streamable-http")
