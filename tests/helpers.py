from quiztool.bank.question_bank import QuestionBank, QuestionRecord


def make_bank(sizes: dict[str, int]) -> QuestionBank:
    """Bank with `n` numbered questions per category: {'Capitals': 2} -> 'Capitals Q1', ..."""
    records = []
    i = 0
    for category, n in sizes.items():
        for k in range(1, n + 1):
            i += 1
            records.append(
                QuestionRecord(
                    id=str(i),
                    category=category,
                    question_text=f"{category} Q{k}",
                    answer_text=f"{category} A{k}",
                )
            )
    return QuestionBank(records)
