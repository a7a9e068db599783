"""Example: using the service layer without Flask.

Controllers are a thin layer; the sign-in rules live in the services.
"""

from src.site_kiosk.site_kiosk.container import build_container
from src.site_kiosk.site_kiosk.database.store import InMemoryStore
from src.site_kiosk.site_kiosk.visits.model import Declarations
from src.site_kiosk.site_kiosk.workers.model import WorkerProfile


def main():
    container = build_container(store=InMemoryStore())
    kiosk = container.kiosk_service

    result = kiosk.sign_in(
        WorkerProfile(id="", name="Sam Carter", company="Apex Electrical", role="Electrician"),
        Declarations(
            ppe_worn=frozenset({"boots", "hivis", "hardhat"}),
            induction_confirmed=True,
            rams_confirmed=True,
            site_rules_acknowledged=True,
        ),
    )
    print([w.label for w in kiosk.on_site()])

    kiosk.sign_out(result.worker)
    print([w.label for w in kiosk.on_site()])
    print(kiosk.export_csv()[1])


if __name__ == "__main__":
    main()
