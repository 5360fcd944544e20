#!/usr/bin/env python3
"""
Varmepumpe backend - Main application entry point
"""
from varmepumpe import create_app, db
from varmepumpe.services.postal_codes import seed_postal_codes
import os

app = create_app()

with app.app_context():
    db.create_all()
    seed_postal_codes()

if __name__ == '__main__':
    port = int(os.getenv('PORT', 5000))
    debug = os.getenv('DEBUG', 'True').lower() == 'true'

    app.run(
        host='0.0.0.0',
        port=port,
        debug=debug
    )
