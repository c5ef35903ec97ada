"""Entry point for the public-diary MCP server."""

from public_diary.server import create_server


def main() -> None:
    """Run the public-diary MCP server."""
    server = create_server()
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
