# Bakeshop - development entry point
# Run with `flask --app app run` or `python app.py`

import os
from bakeshop import create_app

app = create_app(os.environ.get('FLASK_CONFIG', 'development'))

if __name__ == '__main__':
    app.run(debug=app.config.get('DEBUG', False))
