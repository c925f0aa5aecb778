import sys

from tag_uuid_sync.cli import main

sys.exit(main())
