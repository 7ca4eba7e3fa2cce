import os
from typing import Optional

from pydantic import BaseModel, Field

# ---- 探索・評価設定 ----
SEARCH_DEPTH = 2  # 分岐数が最大 64 なので 2 手読みで応答性を優先
MAX_SCORE = 10000
MIN_SCORE = -10000
RANDOM_ROLE = 2  # この役は探索せずランダムに打つ


class EngineSettings(BaseModel):
    search_depth: int = Field(default=SEARCH_DEPTH, ge=1)
    max_score: int = MAX_SCORE
    min_score: int = MIN_SCORE
    random_role: int = Field(default=RANDOM_ROLE, ge=1, le=2)
    seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "EngineSettings":
        seed = os.environ.get("FOUR_CUBE_SEED")
        return cls(
            search_depth=int(os.environ.get("FOUR_CUBE_SEARCH_DEPTH", str(SEARCH_DEPTH))),
            random_role=int(os.environ.get("FOUR_CUBE_RANDOM_ROLE", str(RANDOM_ROLE))),
            seed=int(seed) if seed else None,
        )
