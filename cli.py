# cli.py
import argparse
import json
import os
import sys

print("[CLI] Booting...")

from dotenv import load_dotenv
_loaded = load_dotenv()
print(f"[CLI] .env loaded: {_loaded}")
print(f"[CLI] ENV presence -> GOOGLE_API_KEY: {'yes' if os.getenv('GOOGLE_API_KEY') else 'no'}, "
      f"SEARCH_ENGINE_ID: {'yes' if os.getenv('SEARCH_ENGINE_ID') else 'no'}, "
      f"COINGECKO_API_KEY: {'yes' if os.getenv('COINGECKO_API_KEY') else 'no'}")

try:
    from agent_plugins.plugins import manifest, run_action
    print("[CLI] Import run_action: OK")
except Exception as e:
    print("[CLI] Import run_action: FAIL ->", e)
    sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Crypto agent plugins CLI (debug prints)")
    p.add_argument("--json", action="store_true", help="Print the raw action data as JSON")
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("security", help="CHECK_TOKEN_SECURITY via GoPlus")
    s.add_argument("--chain", default="1", help="GoPlus chain id or name (1, 56, solana, Ethereum, ...)")
    s.add_argument("--address", required=True, help="Token contract address")

    s = sub.add_parser("trending", help="GET_GLOBAL_TRENDING_TOKENS")
    s.add_argument("--chain", default=None, help="Filter DexScreener boosts by chain id (e.g. solana)")
    s.add_argument("--limit", type=int, default=5)
    s.add_argument("--source", default="all", choices=["coingecko", "dexscreener", "all"])

    sub.add_parser("global", help="GET_GLOBAL_DATA")
    sub.add_parser("exchanges", help="GET_EXCHANGES")

    s = sub.add_parser("price", help="GET_SIMPLE_PRICE")
    s.add_argument("coins", nargs="+", help="CoinGecko ids, e.g. bitcoin ethereum")
    s.add_argument("--vs", nargs="+", default=["usd"], help="Quote currencies")

    s = sub.add_parser("pools", help="GET_NETWORK_TRENDING_TOKENS (DefiLlama, by TVL)")
    s.add_argument("chain", help="DefiLlama chain name, case-sensitive (Ethereum, Solana, BSC, ...)")

    s = sub.add_parser("search", help="SEARCH_GOOGLE")
    s.add_argument("query", nargs="+")

    s = sub.add_parser("page", help="GET_PAGE_CONTENT")
    s.add_argument("url")

    sub.add_parser("plugins", help="List plugins and actions")
    return p


def _to_action(args) -> tuple:
    if args.command == "security":
        return "CHECK_TOKEN_SECURITY", {"chain_id": args.chain, "token_address": args.address}
    if args.command == "trending":
        return "GET_GLOBAL_TRENDING_TOKENS", {"chain": args.chain, "limit": args.limit, "source": args.source}
    if args.command == "global":
        return "GET_GLOBAL_DATA", {}
    if args.command == "exchanges":
        return "GET_EXCHANGES", {}
    if args.command == "price":
        return "GET_SIMPLE_PRICE", {"coins": args.coins, "vs_currencies": args.vs}
    if args.command == "pools":
        return "GET_NETWORK_TRENDING_TOKENS", {"chain": args.chain}
    if args.command == "search":
        return "SEARCH_GOOGLE", {"query": " ".join(args.query)}
    if args.command == "page":
        return "GET_PAGE_CONTENT", {"url": args.url}
    raise ValueError(f"Unknown command: {args.command}")


def main(argv=None) -> int:
    print("[CLI] Parsing arguments...")
    args = build_parser().parse_args(argv)
    print(f"[CLI] Args -> {vars(args)}")

    if args.command == "plugins":
        print(json.dumps(manifest(), indent=2))
        return 0

    action, params = _to_action(args)
    print(f"[CLI] Calling {action}...")

    def on_update(resp):
        if resp.type == "processing":
            print(resp.text)

    res = run_action(action, params, callback=on_update)
    print(f"[CLI] {action}: {res.type}")

    if args.json:
        print(json.dumps(res.data, indent=2, sort_keys=False, default=str))
    else:
        print()
        print(res.text)

    print("[CLI] Done.")
    return 0 if res.type == "success" else 1


if __name__ == "__main__":
    sys.exit(main())
