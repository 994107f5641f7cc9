"""Launch the MCP server over stdio and call each price tool once."""

import asyncio
import sys
from pathlib import Path

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client

ROOT = Path(__file__).resolve().parents[1]
SERVER = StdioServerParameters(command=sys.executable, args=["-m", "price_relay.mcp_server"], cwd=str(ROOT))


def _text(result) -> str:
    return "\n".join(c.text for c in result.content if getattr(c, "type", None) == "text")


async def main():
    async with stdio_client(SERVER) as (read, write):
        async with ClientSession(read, write) as session:
            await session.initialize()
            print("Connected to CryptoPrice MCP server\n")

            print("Fetching Bitcoin price:")
            print(_text(await session.call_tool("getCryptoPrice", {"id": "bitcoin", "currency": "usd"})))
            print()

            print("Fetching Ethereum price in EUR:")
            print(_text(await session.call_tool("getCryptoPrice", {"id": "ethereum", "currency": "eur"})))
            print()

            print("Fetching top 5 cryptocurrencies:")
            print(_text(await session.call_tool("listTopCryptos", {"limit": 5})))

            print("\n✅ all operations completed")


if __name__ == "__main__":
    asyncio.run(main())
