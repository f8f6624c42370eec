import json
import os
import random

os.makedirs("test_data", exist_ok=True)


def address(i: int, port: int = 8080) -> dict:
    return {"host": f"10.0.0.{i}", "port": port}


# ============================================================
# 1. Ring: every node sees both neighbours
# ============================================================

def generate_ring(size: int = 12) -> dict:
    nodes = []
    for i in range(1, size + 1):
        left = (i - 2) % size + 1
        right = i % size + 1
        nodes.append({"address": address(i), "peers": [address(left), address(right)]})
    return {"nodes": nodes}


# ============================================================
# 2. Random mesh: each node knows a few peers (like PeerMinPeers=3)
# ============================================================

def generate_mesh(size: int = 30, min_peers: int = 3) -> dict:
    nodes = []
    for i in range(1, size + 1):
        others = [j for j in range(1, size + 1) if j != i]
        peers = random.sample(others, k=min(len(others), random.randint(min_peers, min_peers + 2)))
        nodes.append({"address": address(i), "peers": [address(j) for j in peers]})
    return {"nodes": nodes}


# ============================================================
# 3. Legacy controller format: "addr" and "ip", some nodes unreported
# ============================================================

def generate_legacy(size: int = 8) -> dict:
    nodes = []
    for i in range(1, size + 1):
        peers = [{"ip": f"10.0.1.{j}", "port": 8080} for j in (i + 1, i + size)]
        nodes.append({"addr": {"ip": f"10.0.1.{i}", "port": 8080}, "peers": peers})
    return {"nodes": nodes}


REPORTS = {
    "ring_peers.json": generate_ring,
    "mesh_peers.json": generate_mesh,
    "legacy_peers.json": generate_legacy,
}

if __name__ == "__main__":
    for filename, generate in REPORTS.items():
        path = os.path.join("test_data", filename)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(generate(), f, indent=2)
        print(f"Wrote {path}")
