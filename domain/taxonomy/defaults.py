"""Built-in taxonomy used when no taxonomy file is available."""

DEFAULT_TAXONOMY: dict = {
    "基本情報": {
        "品質": [
            ["最高傑作", "best quality"],
            ["傑作", "masterpiece"],
            ["高画質", "high quality"],
        ],
        "画風": [
            ["写実的", "photorealistic"],
        ],
        "シーン/背景": {
            "場所": {
                "室内": [
                    ["屋内", "indoors"],
                    ["リビング", "living room"],
                    ["ダイニングルーム", "dining room"],
                    ["キッチン", "kitchen"],
                    ["ベッドルーム", "bedroom"],
                ],
                "屋外": [
                    ["屋外", "outdoors"],
                    ["公園", "park"],
                    ["広場", "plaza"],
                    ["街中", "city"],
                    ["路地裏", "back alley"],
                    ["市場", "market"],
                    ["森林", "forest"],
                    ["山", "mountain"],
                ],
                "ファンタジー": [
                    ["ファンタジー世界", "fantasy world"],
                    ["城", "castle"],
                    ["古代遺跡", "ancient ruins"],
                ],
            }
        },
    }
}
