"""
Balance computation for a group.

Core algorithm:
1. Credit each expense payer with the full amount
2. Debit each split participant with their equal share (integer cents)
3. Apply settlements: the sender's debt shrinks, the receiver's credit shrinks
4. Wrap the per-member totals as Balance records

Balances are derived on every read and never stored. Because every step is a
sum, the result does not depend on the order of the inputs, and the balances
of a group always add up to zero.
"""

from typing import Dict, Iterable, List, Tuple

from app.models.balance import Balance, SuggestedSettlement, UserBalanceSummary
from app.models.expense import Expense
from app.models.settlement import Settlement


def compute_balances(
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement]
) -> Dict[str, Balance]:
    """
    Net balance per member from a snapshot of expenses and settlements.

    Members that only appear in a settlement still get an entry. The mapping
    is keyed by member id in ascending order.
    """
    totals: Dict[str, int] = {}

    for expense in expenses:
        totals[expense.paid_by] = totals.get(expense.paid_by, 0) + expense.amount_cents
        for user_id, share in expense.shares().items():
            totals[user_id] = totals.get(user_id, 0) - share

    for settlement in settlements:
        totals[settlement.from_user] = totals.get(settlement.from_user, 0) + settlement.amount_cents
        totals[settlement.to_user] = totals.get(settlement.to_user, 0) - settlement.amount_cents

    return {
        user_id: Balance(user_id=user_id, amount_cents=amount)
        for user_id, amount in sorted(totals.items())
    }


def summarize_balance(balances: Dict[str, Balance], user_id: str) -> UserBalanceSummary:
    """What ``user_id`` is owed and owes; zeros if they have no activity."""
    balance = balances.get(user_id)
    net = balance.amount_cents if balance else 0
    return UserBalanceSummary(
        user_id=user_id,
        is_owed_cents=max(net, 0),
        owes_cents=max(-net, 0),
        net_cents=net
    )


def split_debtors_creditors(
    balances: Dict[str, Balance]
) -> Tuple[List[Balance], List[Balance]]:
    """Members who owe money and members who are owed money, as two lists."""
    debtors = [b for b in balances.values() if b.amount_cents < 0]
    creditors = [b for b in balances.values() if b.amount_cents > 0]
    return debtors, creditors


def suggest_settlements(balances: Dict[str, Balance]) -> List[SuggestedSettlement]:
    """
    Payments that would bring every balance to zero.

    Greedy matching: the largest debtor pays the largest creditor
    min(debt, credit), repeated until one side runs out. Ties are broken by
    member id so the suggestions are stable between calls.
    """
    debtors_in, creditors_in = split_debtors_creditors(balances)
    debtors = sorted(
        ((b.user_id, -b.amount_cents) for b in debtors_in),
        key=lambda d: (-d[1], d[0])
    )
    creditors = sorted(
        ((b.user_id, b.amount_cents) for b in creditors_in),
        key=lambda c: (-c[1], c[0])
    )

    suggestions: List[SuggestedSettlement] = []
    debtor_idx = 0
    creditor_idx = 0

    while debtor_idx < len(debtors) and creditor_idx < len(creditors):
        debtor_id, debtor_amt = debtors[debtor_idx]
        creditor_id, creditor_amt = creditors[creditor_idx]

        match_amt = min(debtor_amt, creditor_amt)
        suggestions.append(SuggestedSettlement(
            from_user=debtor_id,
            to_user=creditor_id,
            amount_cents=match_amt
        ))

        debtor_amt -= match_amt
        creditor_amt -= match_amt

        if debtor_amt == 0:
            debtor_idx += 1
        else:
            debtors[debtor_idx] = (debtor_id, debtor_amt)

        if creditor_amt == 0:
            creditor_idx += 1
        else:
            creditors[creditor_idx] = (creditor_id, creditor_amt)

    return suggestions
