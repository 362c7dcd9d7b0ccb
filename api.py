# api.py
import os
from typing import Any, Dict, List, Optional

print("[API] Booting FastAPI...")

from fastapi import FastAPI, HTTPException, Query, APIRouter, Body
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
from concurrent.futures import ThreadPoolExecutor, as_completed
from pydantic import BaseModel, Field

_loaded = load_dotenv()
print(f"[API] .env loaded: {_loaded}")
print(f"[API] ENV presence -> GOOGLE_API_KEY: {'yes' if os.getenv('GOOGLE_API_KEY') else 'no'}, "
      f"SEARCH_ENGINE_ID: {'yes' if os.getenv('SEARCH_ENGINE_ID') else 'no'}, "
      f"COINGECKO_API_KEY: {'yes' if os.getenv('COINGECKO_API_KEY') else 'no'}")

try:
    from agent_plugins.plugins import manifest, run_action
    from agent_plugins.core.security import check_token_security
    from agent_plugins.core.trending import find_trending_tokens
    from agent_plugins.core.market import get_exchanges, get_global_data, get_simple_price
    from agent_plugins.core.pools import get_trending_tokens_on_chain
    from agent_plugins.core.search import get_page_content, search_google
    from agent_plugins.models import ActionResponse
    print("[API] Import actions: OK")
except Exception as e:
    print("[API] Import actions: FAIL ->", e)
    raise

try:
    from agent_plugins.utils.ratelimit import set_default_qps
    print("[API] Import set_default_qps: OK")
except Exception as e:
    print("[API] Import set_default_qps: FAIL ->", e)
    raise

app = FastAPI(title="Crypto Agent Plugins API", version="0.1.0")
print("[API] FastAPI instance created.")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
print("[API] CORS middleware registered.")

api = APIRouter(prefix="/api")
print("[API] APIRouter created at /api.")


def _log_result(route: str, res: ActionResponse) -> ActionResponse:
    print(f"[API] {route} -> type={res.type} chars={len(res.text)}")
    return res


@api.get("/health")
def health():
    print("[API] GET /api/health")
    return {"ok": True}


@api.get("/plugins")
def plugins():
    print("[API] GET /api/plugins")
    return {"plugins": manifest()}


@api.get("/security/{address}", response_model=ActionResponse)
def security(address: str, chain: str = Query(default="1")):
    print(f"[API] GET /api/security/{address}?chain={chain}")
    return _log_result("/security", check_token_security(chain, address))


@api.get("/trending", response_model=ActionResponse)
def trending(chain: Optional[str] = None, limit: int = Query(default=5, ge=1, le=50),
             source: str = Query(default="all", pattern="^(coingecko|dexscreener|all)$")):
    print(f"[API] GET /api/trending chain={chain} limit={limit} source={source}")
    return _log_result("/trending", find_trending_tokens(chain, limit, source))


@api.get("/global", response_model=ActionResponse)
def global_data():
    print("[API] GET /api/global")
    return _log_result("/global", get_global_data())


@api.get("/exchanges", response_model=ActionResponse)
def exchanges():
    print("[API] GET /api/exchanges")
    return _log_result("/exchanges", get_exchanges())


@api.get("/price", response_model=ActionResponse)
def price(coins: str = Query(..., description="Comma-separated CoinGecko ids"),
          vs: str = Query(default="usd", description="Comma-separated vs currencies")):
    print(f"[API] GET /api/price coins={coins} vs={vs}")
    return _log_result("/price", get_simple_price(coins, vs))


@api.get("/pools/{chain}", response_model=ActionResponse)
def pools(chain: str):
    print(f"[API] GET /api/pools/{chain}")
    return _log_result("/pools", get_trending_tokens_on_chain(chain))


@api.get("/search", response_model=ActionResponse)
def search(q: str = Query(..., min_length=1)):
    print(f"[API] GET /api/search q={q}")
    return _log_result("/search", search_google(q))


@api.get("/page", response_model=ActionResponse)
def page(url: str = Query(...)):
    print(f"[API] GET /api/page url={url}")
    return _log_result("/page", get_page_content(url))


@api.post("/actions/{name}", response_model=ActionResponse)
def action(name: str, params: Optional[Dict[str, Any]] = Body(default=None)):
    print(f"[API] POST /api/actions/{name} params={params}")
    try:
        return _log_result(f"/actions/{name}", run_action(name, params or {}))
    except ValueError as ve:
        print(f"[API] /actions ValueError -> {ve}")
        raise HTTPException(status_code=400, detail=str(ve))


class BatchJob(BaseModel):
    chain: str = "1"
    addresses: List[str]
    concurrency: int = 2
    qps: float = Field(default=4.0, gt=0)


@api.post("/batch")
def batch(job: BatchJob):
    print(f"[API] POST /api/batch -> chain={job.chain} count={len(job.addresses)} conc={job.concurrency} qps={job.qps}")
    if not job.addresses:
        print("[API] /batch error: empty addresses")
        raise HTTPException(status_code=400, detail="addresses list is empty")

    set_default_qps(job.qps)
    print(f"[API] /batch rate limit set: {job.qps} req/s")

    out = []

    def work(addr: str):
        print(f"[API][WORK] Start {addr}")
        res = check_token_security(job.chain, addr)
        data = res.data or {}
        print(f"[API][WORK] {addr} type={res.type} tier={data.get('risk_tier')}")
        if res.type == "success":
            return {"address": addr, "chain": job.chain, "score": data.get("score"),
                    "risk_tier": data.get("risk_tier"), "reasons": data.get("reasons", [])}
        return {"address": addr, "chain": job.chain, "error": res.text}

    with ThreadPoolExecutor(max_workers=max(1, min(8, job.concurrency))) as ex:
        futs = {ex.submit(work, a): a for a in job.addresses}
        for fut in as_completed(futs):
            out.append(fut.result())
    print(f"[API] /batch completed -> {len(out)} results")

    return {"count": len(out), "results": out}


app.include_router(api)
print("[API] Router included.")
