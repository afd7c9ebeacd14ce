"""PostgreSQL exclusion constraint against overlapping active reservations.

daterange(start, end, '[)') matches the checkout-day convention of the
booking domain: a stay may begin the day another ends. Cancelled
reservations never block. Other backends rely on the product row lock.
"""

from django.db import migrations

CONSTRAINT = "reservation_no_overlap"


def add_constraint(apps, schema_editor):
    if schema_editor.connection.vendor != "postgresql":
        return
    schema_editor.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")
    schema_editor.execute(
        f"""
        ALTER TABLE bookings_reservation
        ADD CONSTRAINT {CONSTRAINT}
        EXCLUDE USING gist (
            product_id WITH =,
            daterange(start_date, end_date, '[)') WITH &&
        )
        WHERE (status <> 'cancelled')
        """
    )


def drop_constraint(apps, schema_editor):
    if schema_editor.connection.vendor != "postgresql":
        return
    # btree_gist is kept: other indexes may depend on it.
    schema_editor.execute(f"ALTER TABLE bookings_reservation DROP CONSTRAINT IF EXISTS {CONSTRAINT}")


class Migration(migrations.Migration):

    dependencies = [
        ("bookings", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(add_constraint, drop_constraint),
    ]
