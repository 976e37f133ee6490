from vivafit.domain.identity.schemas import Actor
from vivafit.models import Account


def make_account(db, account_id, name, email, role):
    account = Account(id=account_id, name=name, email=email, role=role)
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


def actor_for(account):
    return Actor(id=account.id, role=account.role, name=account.name, email=account.email)
