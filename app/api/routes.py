from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter()

STOCKS_ERROR_MESSAGE = 'Failed to fetch stock data'


@router.get('/stocks')
def get_stocks(request: Request):
    service = request.app.state.quote_aggregator
    try:
        rows = service.get_company_quotes()
        # encode here so serialization failures get the same 500 body
        return JSONResponse(content=[row.to_payload() for row in rows])
    except Exception as exc:
        print(f'[API][stocks_error] error={exc!r}', flush=True)
        return JSONResponse(status_code=500, content={'error': STOCKS_ERROR_MESSAGE})


@router.get('/metrics/quote')
def quote_metrics(request: Request):
    return request.app.state.quote_aggregator.metrics()
