

import sys
from statsd_client.main import main


if __name__ == '__main__':
    sys.exit(main())
