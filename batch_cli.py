# batch_cli.py
import argparse, json, csv, sys, os
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

print("[BATCH] Booting...")

from dotenv import load_dotenv
_loaded = load_dotenv()
print(f"[BATCH] .env loaded: {_loaded}")
print(f"[BATCH] ENV presence -> HTTP_MAX_QPS: {'yes' if os.getenv('HTTP_MAX_QPS') else 'no'}")

try:
    from agent_plugins.core.security import check_token_security
    print("[BATCH] Import check_token_security: OK")
except Exception as e:
    print("[BATCH] Import check_token_security: FAIL ->", e)
    sys.exit(1)

try:
    from agent_plugins.utils.ratelimit import set_default_qps
    print("[BATCH] Import set_default_qps: OK")
except Exception as e:
    print("[BATCH] Import set_default_qps: FAIL ->", e)
    sys.exit(1)

FIELDNAMES = ["chain_id", "address", "token_name", "token_symbol", "is_open_source", "is_honeypot",
              "buy_tax", "sell_tax", "holder_count", "score", "risk_tier", "reasons", "error"]


def load_addresses(path: str) -> list[str]:
    print(f"[BATCH] Loading addresses from: {path}")
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    addrs = []
    with p.open() as f:
        for line in f:
            s = line.strip()
            if not s or s.startswith("#"):
                continue
            addrs.append(s)
    print(f"[BATCH] Loaded {len(addrs)} addresses")
    return addrs


def flatten_result(chain: str, address: str, res) -> dict:
    """One CSV row from a CHECK_TOKEN_SECURITY response (success or error)."""
    row = {k: "" for k in FIELDNAMES}
    row["chain_id"] = chain
    row["address"] = address
    if res.type != "success":
        row["error"] = res.text
        return row

    data = res.data or {}
    sec = data.get("security") or {}
    row.update({
        "chain_id": data.get("chain_id", chain),
        "address": data.get("address", address),
        "token_name": sec.get("token_name") or "",
        "token_symbol": sec.get("token_symbol") or "",
        "is_open_source": sec.get("is_open_source") or "",
        "is_honeypot": sec.get("is_honeypot") or "",
        "buy_tax": sec.get("buy_tax") or "",
        "sell_tax": sec.get("sell_tax") or "",
        "holder_count": sec.get("holder_count") or "",
        "score": data.get("score"),
        "risk_tier": data.get("risk_tier"),
        "reasons": ";".join(data.get("reasons") or []),
    })
    return row


def main(argv=None):
    print("[BATCH] Parsing arguments...")
    ap = argparse.ArgumentParser(description="Token security batch scanner (GoPlus)")
    ap.add_argument("--chain", default="1", help="GoPlus chain id or name")
    ap.add_argument("--infile", required=True, help="Path to text file with one address per line")
    ap.add_argument("--out-csv", default="batch_scan.csv", help="CSV output path")
    ap.add_argument("--out-json", default="batch_scan.json", help="JSON output path")
    ap.add_argument("--concurrency", type=int, default=2, help="Parallel lookups")
    ap.add_argument("--qps", type=float, default=4.0, help="Max req/s to GoPlus")
    args = ap.parse_args(argv)
    print(f"[BATCH] Args -> chain={args.chain} infile={args.infile} out_csv={args.out_csv} "
          f"out_json={args.out_json} conc={args.concurrency} qps={args.qps}")

    set_default_qps(args.qps)
    print(f"[BATCH] Rate limit set to {args.qps} req/s")

    try:
        addresses = load_addresses(args.infile)
    except FileNotFoundError as e:
        print(f"[BATCH] ❌ {e}", file=sys.stderr)
        return 1

    rows, json_out = [], []

    def work(addr: str):
        print(f"[BATCH][WORK] Start {addr}")
        res = check_token_security(args.chain, addr)
        return flatten_result(args.chain, addr, res), res

    with ThreadPoolExecutor(max_workers=max(1, args.concurrency)) as ex:
        futs = {ex.submit(work, a): a for a in addresses}
        for fut in as_completed(futs):
            row, res = fut.result()
            rows.append(row)
            json_out.append(res.data if res.type == "success"
                            else {"chain_id": args.chain, "address": row["address"], "error": res.text})
            print(f"[BATCH] Result {row['address']} -> score={row['score']} tier={row['risk_tier']} "
                  f"{'(err: ' + row['error'] + ')' if row['error'] else ''}")
    print("[BATCH] All tasks completed.")

    with open(args.out_csv, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=FIELDNAMES)
        w.writeheader()
        w.writerows(rows)
    print(f"[BATCH] Wrote CSV -> {args.out_csv}")

    with open(args.out_json, "w") as f:
        json.dump(json_out, f, indent=2)
    print(f"[BATCH] Wrote JSON -> {args.out_json}")

    print("✅ Done. CSV →", args.out_csv, " JSON →", args.out_json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
