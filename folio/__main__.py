from folio.main import app

app()
