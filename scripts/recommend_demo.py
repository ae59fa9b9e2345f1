"""Walk the sample catalog against a running server: recommend, pass a quiz, recommend again.

Usage: python scripts/recommend_demo.py <token>
"""
import sys

import httpx

BASE = "http://localhost:8000/api/v1"
client = httpx.Client(timeout=15, headers={"Authorization": f"Bearer {sys.argv[1]}"})


def show(label):
    r = client.get(f"{BASE}/recommendation/E", params={"currentConceptId": "root"})
    print(f"\n{label}: {r.status_code}")
    if r.status_code != 200:
        print(f"  Body: {r.text}")
        exit(1)
    for p in r.json()["allPaths"]:
        print(f"  {' -> '.join(p['path'])}  cost={p['totalCost']}")


show("Before")

r = client.post(f"{BASE}/progress/concepts/A/quiz", json={"correctAnswers": 9, "totalQuestions": 10})
result = r.json()
print(f"\nQuiz on A: {r.status_code} score={result['score']} mastered={result['mastered']}")
print(f"Unlocked: {result['unlockedConcepts']}")

show("After")
