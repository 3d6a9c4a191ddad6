import sys

from resolve_aws_secrets.runner.cli import main

sys.exit(main())
