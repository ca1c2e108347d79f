"""
Example usage of the codecs with asyncpg in a realistic flow:
1) connect and register the binary codecs
2) create a table with one column of each kind
3) insert rows, then bulk-load more with binary COPY
4) query nearest neighbors with distance expressions
5) clean up
"""
import asyncio
import random

import asyncpg
from vectorwire import (
    Bit,
    HalfVector,
    SparseVector,
    Vector,
    cosine_distance,
    hamming_distance,
    l2_distance,
)
from vectorwire.config import DB_DSN
from vectorwire.db import connect

DIM = 8


def make_vec(seed: int) -> list[float]:
    rng = random.Random(seed)
    return [round(rng.uniform(-1, 1), 3) for _ in range(DIM)]


async def main() -> None:
    # register_vector() needs the extension to exist before it runs
    setup = await asyncpg.connect(DB_DSN)
    await setup.execute("CREATE EXTENSION IF NOT EXISTS vector")
    await setup.close()

    conn = await connect()
    try:
        await conn.execute("DROP TABLE IF EXISTS vectorwire_demo")
        await conn.execute(
            f"""
            CREATE TABLE vectorwire_demo (
                id bigserial PRIMARY KEY,
                embedding vector({DIM}),
                half_embedding halfvec({DIM}),
                sparse_embedding sparsevec({DIM}),
                binary_embedding bit({DIM})
            )
            """
        )

        rows = []
        for seed in range(100):
            dense = make_vec(seed)
            rows.append(
                (
                    Vector(dense),
                    HalfVector(dense),
                    SparseVector.from_dense([x if x > 0 else 0.0 for x in dense[:-1]] + [0.0]),
                    Bit([x > 0 for x in dense]),
                )
            )
        await conn.executemany(
            "INSERT INTO vectorwire_demo (embedding, half_embedding, sparse_embedding, binary_embedding) "
            "VALUES ($1, $2, $3, $4)",
            rows[:10],
        )
        # Binary COPY goes through the same codecs
        await conn.copy_records_to_table(
            "vectorwire_demo",
            records=rows[10:],
            columns=["embedding", "half_embedding", "sparse_embedding", "binary_embedding"],
        )
        print("Loaded rows:", await conn.fetchval("SELECT count(*) FROM vectorwire_demo"))

        query = Vector(make_vec(3))
        expr_sql, params = cosine_distance("embedding", query).to_sql()
        nearest = await conn.fetch(
            f"SELECT id, embedding, {expr_sql} AS score FROM vectorwire_demo ORDER BY {expr_sql} LIMIT 3",
            *params,
        )
        for row in nearest:
            print("cosine:", row["id"], row["embedding"].to_text(), round(row["score"], 4))

        expr_sql, params = l2_distance("half_embedding", HalfVector(make_vec(3))).to_sql()
        half_nearest = await conn.fetch(
            f"SELECT id FROM vectorwire_demo ORDER BY {expr_sql} LIMIT 3", *params
        )
        print("halfvec l2 neighbors:", [r["id"] for r in half_nearest])

        expr_sql, params = hamming_distance("binary_embedding", Bit([x > 0 for x in make_vec(3)])).to_sql()
        bit_nearest = await conn.fetch(
            f"SELECT id, binary_embedding FROM vectorwire_demo ORDER BY {expr_sql} LIMIT 3", *params
        )
        print("hamming neighbors:", [(r["id"], r["binary_embedding"].to_text()) for r in bit_nearest])

        sparse = await conn.fetchval("SELECT sparse_embedding FROM vectorwire_demo ORDER BY id LIMIT 1")
        print("first sparse row:", sparse.to_text(), "->", sparse.to_dense())
    finally:
        await conn.execute("DROP TABLE IF EXISTS vectorwire_demo")
        await conn.close()


if __name__ == "__main__":
    asyncio.run(main())
