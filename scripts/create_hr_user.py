"""Create or promote an HR account.

Usage:
  python scripts/create_hr_user.py hr@school.edu.ph 'S3cret!' Ana Reyes [--admin]

Registration through the API only creates applicants; staff accounts are
provisioned here.
"""

import argparse
import os
import sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
  sys.path.insert(0, ROOT)

from hiring import create_app
from hiring.extensions import db
from hiring.models import User, Role


def main(argv=None):
  parser = argparse.ArgumentParser(description='Create or promote an HR account.')
  parser.add_argument('email')
  parser.add_argument('password')
  parser.add_argument('first_name')
  parser.add_argument('last_name', nargs='?')
  parser.add_argument('--admin', action='store_true', help='grant ADMIN instead of HR')
  args = parser.parse_args(argv)

  app = create_app()
  with app.app_context():
    email = args.email.strip().lower()
    user = User.query.filter_by(email=email).first()
    if user is None:
      user = User(email=email, first_name=args.first_name, last_name=args.last_name)
      db.session.add(user)
    user.role = Role.ADMIN if args.admin else Role.HR
    user.set_password(args.password)
    db.session.commit()
    app.logger.info('Staff user %s ready (role %s)', user.email, user.role)


if __name__ == '__main__':
  main()
